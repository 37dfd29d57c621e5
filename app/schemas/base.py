from datetime import datetime, timezone

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel
from typing import Annotated

# trimmed, must still have content after trimming
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def as_utc(value: datetime) -> datetime:
    # the database hands back naive values that are UTC
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


# written like the error bodies: 2024-03-01T09:30:00+00:00
UTCDatetime = Annotated[
    datetime,
    AfterValidator(as_utc),
    PlainSerializer(lambda value: value.isoformat(), return_type=str, when_used="json"),
]


class BaseSchema(BaseModel):
    # snake_case in Python, camelCase on the wire (the dashboard's JS expects it)
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class TimestampSchema(BaseSchema):
    created_at: UTCDatetime
