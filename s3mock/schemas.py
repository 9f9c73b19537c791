"""Pydantic schemas for validating mock S3 requests."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from .errors import InvalidParameterError


class BucketParams(BaseModel):
    """Parameters of createBucket / deleteBucket."""

    model_config = ConfigDict(extra="allow")

    Bucket: StrictStr = Field(..., min_length=1, description="Bucket name")


class Tag(BaseModel):
    """A single object tag."""

    Key: StrictStr = Field(..., description="Tag key")
    Value: StrictStr = Field(..., description="Tag value")


class Tagging(BaseModel):
    """Tagging payload of putObjectTagging."""

    model_config = ConfigDict(extra="allow")

    TagSet: List[Tag] = Field(..., description="Ordered tag set")


def validate_bucket_params(params: Any) -> BucketParams:
    """Validate bucket parameters, raising InvalidParameterError."""
    if not isinstance(params, Mapping):
        raise InvalidParameterError("Mock-AWS-S3: Argument 'params' must be an Object")
    try:
        return BucketParams.model_validate(dict(params))
    except ValidationError as e:
        raise InvalidParameterError(
            "Mock-AWS-S3: Argument 'params' must contain a 'Bucket' (String) property"
        ) from e


def validate_tagging(params: Any) -> List[dict]:
    """Validate a putObjectTagging request and return its tag set."""
    tagging = params.get("Tagging") if isinstance(params, Mapping) else None
    if not isinstance(tagging, Mapping) or tagging.get("TagSet") is None:
        raise InvalidParameterError("Tagging.TagSet required")
    try:
        parsed = Tagging.model_validate(dict(tagging))
    except ValidationError as e:
        raise InvalidParameterError(f"Tagging.TagSet is malformed: {e.error_count()} error(s)") from e
    return [tag.model_dump() for tag in parsed.TagSet]
