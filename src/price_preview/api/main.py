from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional

from price_preview import __version__
from price_preview.api import state
from price_preview.engine import compute, PriceInput, Promotion, Discount, Tax
from price_preview.logging_config import setup_logging, get_logger
from price_preview.services.product_flows import (
    PersistedProduct,
    initial_edit_selection,
    create_flow_input,
    edit_flow_input,
    create_payload,
    update_payload,
)

setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Price Preview API",
    description="Staged price adjustment preview for the seller product forms",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PromotionModel(BaseModel):
    id: str
    name: str
    value_percent: Optional[float] = None
    promotion_type: str = "automatic"
    code: Optional[str] = None


class AdjustmentModel(BaseModel):
    """Discount or tax: kind is "percentage" or "fixed"."""
    id: str
    name: str
    kind: str
    value: float


class PreviewRequest(BaseModel):
    base_amount: float = 0.0
    promotions: list[PromotionModel] = []
    discount: Optional[AdjustmentModel] = None
    taxes: list[AdjustmentModel] = []


class CreatePreviewRequest(BaseModel):
    price: str = ""
    discount_id: Optional[str] = None
    tax_ids: list[str] = []


class EditPreviewRequest(BaseModel):
    """Selections left as null are pre-filled from the stored product; send [] or "" to clear."""
    price: str = ""
    product: dict = {}
    promotion_ids: Optional[list[str]] = None
    discount_id: Optional[str] = None
    tax_ids: Optional[list[str]] = None


@app.get("/")
async def root():
    return {"status": "online", "message": "Price Preview API Active"}


@app.post("/preview")
async def preview(req: PreviewRequest):
    try:
        price_input = PriceInput(
            base_amount=req.base_amount,
            promotions=[Promotion(**p.model_dump()) for p in req.promotions],
            discount=Discount(**req.discount.model_dump()) if req.discount else None,
            taxes=[Tax(**t.model_dump()) for t in req.taxes],
        )
        result = compute(price_input)
    except Exception as e:
        logger.exception("price_preview_failed", flow="direct")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("price_preview", flow="direct", final_total=result.final_total, steps=len(result.steps))
    return result.to_dict()


@app.post("/products/preview/create")
async def preview_create(req: CreatePreviewRequest):
    try:
        price_input = create_flow_input(req.price, state.catalog, req.discount_id, req.tax_ids)
        result = compute(price_input)
        payload = create_payload(req.price, result, req.discount_id, req.tax_ids)
    except Exception as e:
        logger.exception("price_preview_failed", flow="create")
        raise HTTPException(status_code=500, detail=str(e))

    logger.info("price_preview", flow="create", final_total=result.final_total, steps=len(result.steps))
    return {"preview": result.to_dict(), "payload": payload}


@app.post("/products/{product_id}/preview/edit")
async def preview_edit(product_id: str, req: EditPreviewRequest):
    try:
        product = PersistedProduct.from_api({**req.product, "id": product_id})
        stored = initial_edit_selection(product)
        promotion_ids = stored["promotion_ids"] if req.promotion_ids is None else req.promotion_ids
        discount_id = stored["discount_id"] if req.discount_id is None else req.discount_id
        tax_ids = stored["tax_ids"] if req.tax_ids is None else req.tax_ids

        price_input = edit_flow_input(
            req.price,
            product,
            state.catalog,
            promotion_ids=promotion_ids,
            discount_id=discount_id,
            tax_ids=tax_ids,
        )
        result = compute(price_input)
        payload = update_payload(req.price, result, discount_id, tax_ids, promotion_ids)
    except Exception as e:
        logger.exception("price_preview_failed", flow="edit", product_id=product_id)
        raise HTTPException(status_code=500, detail=str(e))

    logger.info(
        "price_preview",
        flow="edit",
        product_id=product_id,
        final_total=result.final_total,
        steps=len(result.steps),
    )
    return {"preview": result.to_dict(), "payload": payload}


@app.get("/catalog/modifiers")
async def get_modifiers():
    return state.catalog.to_dict()


@app.post("/catalog/reload")
async def reload_catalog():
    try:
        state.catalog.reload()
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"success": True, **_catalog_counts()}


@app.get("/system/status")
async def get_status():
    return {"engine_active": True, **_catalog_counts()}


def _catalog_counts() -> dict:
    return {
        "promotions_count": len(state.catalog.promotions),
        "discounts_count": len(state.catalog.discounts),
        "taxes_count": len(state.catalog.taxes),
    }
