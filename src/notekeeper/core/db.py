from typing import Annotated, Any, Self

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pymongo.asynchronous.cursor import AsyncCursor


def _object_id_to_str(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


# ObjectId stored in MongoDB, exposed as its 24-character hex string
ObjectIdStr = Annotated[str, BeforeValidator(_object_id_to_str)]


def new_object_id() -> str:
    return str(ObjectId())


class MongoModel(BaseModel):
    id: ObjectIdStr = Field(alias="_id", serialization_alias="id", default_factory=new_object_id)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage with _id field."""
        data = self.model_dump()
        if "id" in data:
            data["_id"] = ObjectId(data.pop("id"))  # Rename id → _id for MongoDB
        return data

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]
