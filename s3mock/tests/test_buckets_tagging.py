"""Tests for bucket lifecycle and object tagging."""
from types import MappingProxyType

import pytest

from s3mock.errors import InvalidParameterError
from s3mock.side_tables import parse_tagging


class TestBuckets:
    """Test cases for createBucket / deleteBucket."""

    def test_create_and_delete_bucket(self, s3, temp_s3_dir):
        """Test 1: Bucket lifecycle is a directory create/remove."""
        data = s3.create_bucket({"Bucket": "fresh"}).promise().result()
        assert data == {"Location": "/fresh"}
        assert (temp_s3_dir / "fresh").is_dir()

        (temp_s3_dir / "fresh" / "obj").write_bytes(b"1")
        assert s3.delete_bucket({"Bucket": "fresh"}).promise().result() == {}
        assert not (temp_s3_dir / "fresh").exists()

    def test_create_existing_bucket(self, s3, bucket):
        assert s3.create_bucket({"Bucket": "demo"}).promise().result() == {"Location": "/demo"}

    def test_delete_missing_bucket(self, s3, temp_s3_dir):
        assert s3.delete_bucket({"Bucket": "never"}).promise().result() == {}

    def test_read_only_mapping_params(self, s3, temp_s3_dir):
        """Any mapping is accepted as params, not only dict."""
        params = MappingProxyType({"Bucket": "fresh"})
        assert s3.create_bucket(params).promise().result() == {"Location": "/fresh"}
        assert (temp_s3_dir / "fresh").is_dir()
        assert s3.delete_bucket(params).promise().result() == {}
        assert not (temp_s3_dir / "fresh").exists()

    @pytest.mark.parametrize("method", ["create_bucket", "delete_bucket"])
    @pytest.mark.parametrize(
        "params, message",
        [
            (None, "must be an Object"),
            ("demo", "must be an Object"),
            ({}, "must contain a 'Bucket' (String) property"),
            ({"Bucket": ""}, "must contain a 'Bucket' (String) property"),
            ({"Bucket": 7}, "must contain a 'Bucket' (String) property"),
        ],
    )
    def test_invalid_params(self, s3, temp_s3_dir, method, params, message):
        """Test 2: Malformed params are a validation error and touch nothing."""
        outcome = []
        getattr(s3, method)(params, lambda err, data: outcome.append((err, data)))
        err, data = outcome[0]
        assert isinstance(err, InvalidParameterError)
        assert isinstance(err, ValueError)
        assert message in str(err)
        assert data is None
        assert list(temp_s3_dir.iterdir()) == []


class TestTagging:
    """Test cases for object tagging."""

    def test_tagging_from_put(self, s3, bucket):
        """Test 3: A query-string Tagging on put becomes the tag set."""
        s3.put_object({"Bucket": "demo", "Key": "t", "Body": b"1", "Tagging": "a=1&b=two%20words"}).promise().result()
        data = s3.get_object_tagging({"Bucket": "demo", "Key": "t"}).promise().result()
        assert data == {
            "VersionId": "1",
            "TagSet": [{"Key": "a", "Value": "1"}, {"Key": "b", "Value": "two words"}],
        }

    def test_get_tagging_defaults_to_empty(self, s3, bucket):
        (bucket / "t").write_bytes(b"1")
        data = s3.get_object_tagging({"Bucket": "demo", "Key": "t"}).promise().result()
        assert data["TagSet"] == []

    def test_put_then_get_tagging(self, s3, bucket):
        (bucket / "t").write_bytes(b"1")
        tag_set = [{"Key": "env", "Value": "test"}]
        result = s3.put_object_tagging({"Bucket": "demo", "Key": "t", "Tagging": {"TagSet": tag_set}}).promise().result()
        assert result == {"VersionId": "1"}
        data = s3.get_object_tagging({"Bucket": "demo", "Key": "t"}).promise().result()
        assert data["TagSet"] == tag_set

    def test_put_tagging_with_read_only_mappings(self, s3, bucket):
        (bucket / "t").write_bytes(b"1")
        tagging = MappingProxyType({"TagSet": [{"Key": "env", "Value": "test"}]})
        params = MappingProxyType({"Bucket": "demo", "Key": "t", "Tagging": tagging})
        assert s3.put_object_tagging(params).promise().result() == {"VersionId": "1"}
        data = s3.get_object_tagging({"Bucket": "demo", "Key": "t"}).promise().result()
        assert data["TagSet"] == [{"Key": "env", "Value": "test"}]

    def test_empty_tag_set_clears_tags(self, s3, bucket):
        s3.put_object({"Bucket": "demo", "Key": "t", "Body": b"1", "Tagging": "a=1"}).promise().result()
        s3.put_object_tagging({"Bucket": "demo", "Key": "t", "Tagging": {"TagSet": []}}).promise().result()
        assert s3.get_object_tagging({"Bucket": "demo", "Key": "t"}).promise().result()["TagSet"] == []

    def test_tagging_missing_object(self, s3, bucket):
        """Test 4: Tagging calls fail when the object does not exist."""
        with pytest.raises(FileNotFoundError) as exc_info:
            s3.get_object_tagging({"Bucket": "demo", "Key": "nope"}).promise().result()
        assert exc_info.value.status_code == 404

        with pytest.raises(FileNotFoundError):
            s3.put_object_tagging(
                {"Bucket": "demo", "Key": "nope", "Tagging": {"TagSet": [{"Key": "a", "Value": "b"}]}}
            ).promise().result()

    @pytest.mark.parametrize(
        "params",
        [
            {"Bucket": "demo", "Key": "t"},
            {"Bucket": "demo", "Key": "t", "Tagging": {}},
            {"Bucket": "demo", "Key": "t", "Tagging": {"TagSet": "a=b"}},
            {"Bucket": "demo", "Key": "t", "Tagging": {"TagSet": [{"Key": "a"}]}},
        ],
    )
    def test_put_tagging_requires_tag_set(self, s3, bucket, params):
        (bucket / "t").write_bytes(b"1")
        with pytest.raises(InvalidParameterError):
            s3.put_object_tagging(params).promise().result()

    def test_parse_tagging(self):
        assert parse_tagging("k=v&k=w&x") == [{"Key": "k", "Value": "w"}, {"Key": "x", "Value": ""}]
        assert parse_tagging("a%26b=c%3Dd") == [{"Key": "a&b", "Value": "c=d"}]
