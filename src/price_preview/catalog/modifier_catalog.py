"""
Modifier Catalog - the store's active promotions, discounts and taxes.

Loaded from CSV exports (one file per modifier kind) or from the records the
REST backend returns. Malformed numbers are kept as NaN so the engine turns
them into zero-delta steps instead of failing the whole preview.
"""
import math
from dataclasses import asdict
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from ..config.settings import Settings, get_settings
from ..engine.models import Promotion, Discount, Tax
from ..logging_config import get_logger

logger = get_logger(__name__)


def _to_number(value) -> float:
    """Coerce a backend value to float; anything unparseable becomes NaN."""
    if isinstance(value, bool) or value is None:
        return float('nan')
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(str(value).strip())
    except ValueError:
        return float('nan')


def _read_csv(path: Path, kind: str) -> pd.DataFrame:
    """Read a modifier CSV as strings; a missing, empty or id-less file gives an empty frame."""
    if not path.exists():
        logger.warning("modifier_file_missing", kind=kind, path=str(path))
        return pd.DataFrame()

    try:
        df = pd.read_csv(path, dtype=str).fillna('')
    except pd.errors.EmptyDataError:
        logger.warning("modifier_file_empty", kind=kind, path=str(path))
        return pd.DataFrame()

    df.columns = [str(col).strip() for col in df.columns]
    if 'id' not in df.columns:
        logger.warning("modifier_file_without_id", kind=kind, path=str(path), columns=list(df.columns))
        return pd.DataFrame()

    for col in df.columns:
        df[col] = df[col].astype(str).str.strip()

    # Rows without an id cannot be selected
    return df[df['id'] != '']


def _active_rows(df: pd.DataFrame, active_status: str) -> pd.DataFrame:
    if df.empty:
        return df
    if 'status' in df.columns:
        df = df[df['status'].str.lower() == active_status]
    return df


def promotions_from_frame(df: pd.DataFrame) -> list[Promotion]:
    if df.empty:
        return []
    values = pd.to_numeric(df.get('value', pd.Series(index=df.index, dtype=str)), errors='coerce')
    promotions = []
    for (_, row), value in zip(df.iterrows(), values):
        promotions.append(Promotion(
            id=row['id'],
            name=row.get('name', row['id']),
            # Promotions without a configured value are allowed (no-op step)
            value_percent=None if pd.isna(value) and not row.get('value') else float(value),
            promotion_type=row.get('type') or "automatic",
            code=row.get('code') or None,
        ))
    return promotions


def _adjustments_from_frame(df: pd.DataFrame, cls, value_column: str) -> list:
    if df.empty:
        return []
    values = pd.to_numeric(df.get(value_column, pd.Series(index=df.index, dtype=str)), errors='coerce')
    return [
        cls(
            id=row['id'],
            name=row.get('name', row['id']),
            kind=row.get('type', ''),
            value=float(value),
        )
        for (_, row), value in zip(df.iterrows(), values)
    ]


def discounts_from_frame(df: pd.DataFrame) -> list[Discount]:
    return _adjustments_from_frame(df, Discount, 'value')


def taxes_from_frame(df: pd.DataFrame) -> list[Tax]:
    # Backend exposes the tax amount as "rate"
    return _adjustments_from_frame(df, Tax, 'rate')


class ModifierCatalog:
    """
    Active modifiers available to a store's product form.

    Selection helpers resolve ids in the order they are given (the order the
    seller picked them), never in catalog order.
    """

    def __init__(
        self,
        promotions: Optional[Iterable[Promotion]] = None,
        discounts: Optional[Iterable[Discount]] = None,
        taxes: Optional[Iterable[Tax]] = None,
        settings: Optional[Settings] = None,
    ):
        self.promotions: list[Promotion] = list(promotions or [])
        self.discounts: list[Discount] = list(discounts or [])
        self.taxes: list[Tax] = list(taxes or [])
        self.settings = settings

    @classmethod
    def load(cls, settings: Optional[Settings] = None) -> 'ModifierCatalog':
        """Load active modifiers from the CSV files configured in settings."""
        catalog = cls(settings=settings or get_settings())
        catalog.reload()
        return catalog

    def reload(self):
        """Re-read all modifier CSVs from disk."""
        settings = self.settings or get_settings()
        status = settings.active_status

        self.promotions = promotions_from_frame(
            _active_rows(_read_csv(settings.promotions_csv, 'promotion'), status)
        )
        self.discounts = discounts_from_frame(
            _active_rows(_read_csv(settings.discounts_csv, 'discount'), status)
        )
        self.taxes = taxes_from_frame(
            _active_rows(_read_csv(settings.taxes_csv, 'tax'), status)
        )

        logger.info(
            "modifier_catalog_loaded",
            promotions=len(self.promotions),
            discounts=len(self.discounts),
            taxes=len(self.taxes),
        )

    @classmethod
    def from_records(
        cls,
        promotions: Iterable[dict] = (),
        discounts: Iterable[dict] = (),
        taxes: Iterable[dict] = (),
        settings: Optional[Settings] = None,
    ) -> 'ModifierCatalog':
        """Build a catalog from backend JSON records, keeping active ones only."""
        settings = settings or get_settings()
        status = settings.active_status

        def active(records):
            return [
                r for r in records
                if r.get('id') is not None
                and str(r.get('status', status)).strip().lower() == status
            ]

        return cls(
            promotions=[
                Promotion(
                    id=str(r['id']),
                    name=r.get('name') or str(r['id']),
                    value_percent=None if r.get('value') is None else _to_number(r['value']),
                    promotion_type=r.get('type') or "automatic",
                    code=r.get('code'),
                )
                for r in active(promotions)
            ],
            discounts=[
                Discount(
                    id=str(r['id']),
                    name=r.get('name') or str(r['id']),
                    kind=r.get('type', ''),
                    value=_to_number(r.get('value')),
                )
                for r in active(discounts)
            ],
            taxes=[
                Tax(
                    id=str(r['id']),
                    name=r.get('name') or str(r['id']),
                    kind=r.get('type', ''),
                    value=_to_number(r.get('rate')),
                )
                for r in active(taxes)
            ],
            settings=settings,
        )

    def select_promotions(self, promotion_ids: Iterable[str]) -> list[Promotion]:
        """Resolve promotion ids in selection order; unknown ids are dropped."""
        lookup = {p.id: p for p in self.promotions}
        return [lookup[pid] for pid in promotion_ids if pid in lookup]

    def select_taxes(self, tax_ids: Iterable[str]) -> list[Tax]:
        """Resolve tax ids in selection order; unknown ids are dropped."""
        lookup = {t.id: t for t in self.taxes}
        return [lookup[tid] for tid in tax_ids if tid in lookup]

    def get_discount(self, discount_id: Optional[str]) -> Optional[Discount]:
        """Get the selected discount, or None."""
        if not discount_id:
            return None
        for discount in self.discounts:
            if discount.id == discount_id:
                return discount
        return None

    def to_dict(self) -> dict:
        """Catalog contents for listing endpoints and UI pickers (NaN → None)."""
        def clean(modifier) -> dict:
            data = asdict(modifier)
            for key, value in data.items():
                if isinstance(value, float) and not math.isfinite(value):
                    data[key] = None
            return data

        return {
            'promotions': [clean(p) for p in self.promotions],
            'discounts': [clean(d) for d in self.discounts],
            'taxes': [clean(t) for t in self.taxes],
        }
