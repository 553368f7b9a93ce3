# products_api/core.py
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictFloat, StrictInt, StrictStr
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError

# ---------------------------
# Incoming payload schema
# ---------------------------
class ProductIn(BaseModel):
    # Unknown keys (a client-supplied "id" included) are dropped.
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    name: StrictStr
    description: StrictStr
    price: Union[StrictInt, StrictFloat]
    category: StrictStr
    in_stock: StrictBool = Field(alias="inStock")


def validate_product(payload: Any) -> ProductIn:
    """Accept a decoded JSON body only if all five product fields are present
    with the right primitive types. Any problem gives the same error."""
    if not isinstance(payload, dict):
        raise ValidationError("Invalid product data")
    try:
        return ProductIn.model_validate(payload)
    except PydanticValidationError:
        raise ValidationError("Invalid product data") from None


# ---------------------------
# Helpers
# ---------------------------
def _make_product_dict(product_id: str, p: ProductIn) -> Dict[str, Any]:
    return {
        "id": product_id,
        "name": p.name,
        "description": p.description,
        "price": p.price,
        "category": p.category,
        "inStock": p.in_stock,
    }
