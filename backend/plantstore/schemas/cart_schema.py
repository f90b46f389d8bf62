from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

# Fields stay loosely typed: the services validate and coerce them and answer
# with InvalidArgument, so a bad value never turns into a framework error shape.


class AddCartItemIn(BaseModel):
    model_config = ConfigDict(extra="ignore")
    plantId: Optional[Any] = None
    quantity: Any = 1


class UpdateCartItemIn(BaseModel):
    model_config = ConfigDict(extra="ignore")
    quantity: Any = None


class AddWishlistPlantIn(BaseModel):
    model_config = ConfigDict(extra="ignore")
    plantId: Optional[Any] = None
    notes: Any = ""
