#
#
#

"""Models exchanged with the Simply.com DNS API.

Response models validate the service's JSON with pydantic, any mismatch
surfaces as ``pydantic.ValidationError`` which the client turns into
``SimplyDecodeError``. Request models serialize with ``to_payload``.
"""

from typing import Any, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    NonNegativeInt,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)


class RecordId(BaseModel):
    """Opaque handle to an existing record, assigned by the service.

    Only obtained from ``list_records`` or ``create_record`` results so that
    it cannot be mixed up with a ttl or priority at call sites.
    """

    model_config = ConfigDict(frozen=True)

    value: StrictInt

    def __init__(self, value, **kwargs):
        super().__init__(value=value, **kwargs)

    def __str__(self) -> str:
        return str(self.value)


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_id: RecordId
    name: StrictStr
    record_type: StrictStr = Field(alias='type', min_length=1)
    ttl: NonNegativeInt = Field(strict=True)
    data: StrictStr
    priority: Optional[StrictInt] = None
    comment: Optional[StrictStr] = None

    @field_validator('record_id', mode='before')
    @classmethod
    def _wrap_record_id(cls, value):
        if isinstance(value, RecordId):
            return value
        return {'value': value}


class ListResponse(BaseModel):
    # required, but the service may send null for an empty domain
    records: Optional[List[Record]]


class CreatedId(BaseModel):
    id: StrictInt


class CreateResponse(BaseModel):
    status: Any = None
    message: Any = None
    record: Optional[List[CreatedId]] = None

    @property
    def record_ids(self) -> List[RecordId]:
        return [RecordId(created.id) for created in self.record or []]


class ErrorEnvelope(BaseModel):
    message: Optional[StrictStr] = None


class CreateRequest(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_type: str = Field(alias='type', min_length=1)
    name: str
    data: str
    priority: Optional[int] = None
    ttl: Optional[NonNegativeInt] = None
    comment: Optional[str] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class UpdateRequest(BaseModel):
    """Replacement attributes for an existing record.

    The comment cannot be changed through the update endpoint.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    record_type: str = Field(alias='type', min_length=1)
    name: str
    data: str
    priority: Optional[int] = None
    ttl: Optional[NonNegativeInt] = None

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


def error_message_from_payload(payload) -> str:
    """Best-effort ``message`` from a ``{message?}`` error envelope."""
    try:
        return ErrorEnvelope.model_validate(payload).message or ''
    except ValidationError:
        return ''
