"""Restaurant data models."""

from pydantic import BaseModel, ConfigDict, Field


class Restaurant(BaseModel):
    """A restaurant record as held by the store."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., description="Server-generated unique identifier")
    name: str = Field(..., description="Restaurant name")
    cuisine: str = Field(..., description="Type of cuisine")
    has_takeout: bool = Field(
        ..., alias="hasTakeout", description="Whether takeout is offered"
    )


class RestaurantCreate(BaseModel):
    """Body of a create request. Any client-supplied id is ignored."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., description="Restaurant name")
    cuisine: str = Field(..., description="Type of cuisine")
    has_takeout: bool = Field(
        ..., alias="hasTakeout", description="Whether takeout is offered"
    )


class RestaurantUpdate(BaseModel):
    """Partial body of an update request.

    Every field may be omitted, but a field that is sent must carry a value
    of its declared type; ``null`` is rejected. The ``None`` defaults are
    never validated and only mark a field as unset.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(None, description="Restaurant name")
    cuisine: str = Field(None, description="Type of cuisine")
    has_takeout: bool = Field(
        None, alias="hasTakeout", description="Whether takeout is offered"
    )

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


class ErrorMessage(BaseModel):
    """Error payload returned for failed requests."""

    message: str = Field(..., description="Human-readable error message")
