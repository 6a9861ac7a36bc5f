"""
Legacy Record Migration

Older holding records are flat: every class-specific column lives on one
row, and the kind of holding is only implied by the asset-class name.
This module turns such a row into a tagged Holding.

Class-name matching is kept HERE ONLY. Everything downstream dispatches on
Holding.kind.
"""

from datetime import date, datetime
from typing import Any, Optional

from assetplace.models.holding import (
    AssetClass,
    Holding,
    HoldingKind,
)


# Ordered: the first matching rule wins ("stock option" before "stock").
_CLASS_NAME_RULES: list[tuple[tuple[str, ...], HoldingKind]] = [
    (("option",), HoldingKind.STOCK_OPTION),
    (("property", "real estate"), HoldingKind.PROPERTY),
    (("cash", "bank"), HoldingKind.CASH),
    (("share", "stock"), HoldingKind.SHARES),
    (("employment", "income"), HoldingKind.EMPLOYMENT),
    (("loan", "mortgage", "debt"), HoldingKind.LOAN),
]

# snake_case payload field -> legacy column(s), first non-null wins
_PAYLOAD_COLUMNS: dict[HoldingKind, dict[str, tuple[str, ...]]] = {
    HoldingKind.PROPERTY: {
        "property_type": ("propertyType",),
        "address": ("address",),
        "suburb": ("suburb",),
        "state": ("state",),
        "postcode": ("postcode",),
        "country": ("country",),
        "bedrooms": ("bedrooms",),
        "bathrooms": ("bathrooms",),
        "land_size": ("landSize",),
        "floor_area": ("floorArea",),
        "parking_spaces": ("parkingSpaces",),
        "is_rental": ("isRental",),
        "rental_income": ("rentalIncome",),
        "rental_frequency": ("rentalFrequency",),
        "vacancy_rate": ("vacancyRate",),
    },
    HoldingKind.CASH: {
        "institution": ("institution",),
        "account_number": ("accountNumber",),
        "account_type": ("accountType",),
        "account_purpose": ("accountPurpose",),
        "interest_rate": ("interestRate",),
        "is_offset_account": ("isOffsetAccount",),
        "offset_linked_loan_id": ("offsetLinkedLoanId",),
    },
    HoldingKind.LOAN: {
        "provider": ("loanProvider", "mortgageLender"),
        "interest_rate": ("interestRate", "mortgageInterestRate"),
        "rate_type": ("interestRateType", "mortgageType"),
        "loan_term": ("loanTerm", "mortgageTerm"),
        "start_date": ("startDate", "mortgageStartDate"),
        "payment_frequency": ("paymentFrequency", "mortgagePaymentFrequency"),
        "payment_amount": ("paymentAmount",),
        "original_loan_amount": ("originalLoanAmount", "mortgageAmount"),
    },
    HoldingKind.SHARES: {
        "ticker": ("ticker",),
        "exchange": ("exchange",),
        "shares_quantity": ("sharesQuantity",),
        "current_price": ("currentPrice",),
        "dividend_yield": ("dividendYield",),
        "dividend_history": ("dividendHistory",),
    },
    HoldingKind.EMPLOYMENT: {
        "employer": ("employer",),
        "base_salary": ("baseSalary",),
        "payment_frequency": ("paymentFrequency",),
        "bonus_type": ("bonusType",),
        "bonus_fixed_amount": ("bonusFixedAmount",),
        "bonus_percentage": ("bonusPercentage",),
        "bonus_likelihood": ("bonusLikelihood",),
    },
    HoldingKind.STOCK_OPTION: {
        "ticker": ("ticker",),
        "exchange": ("exchange",),
        "strike_price": ("strikePrice",),
        "option_quantity": ("optionQuantity",),
        "vested_quantity": ("vestedQuantity",),
        "grant_date": ("grantDate",),
        "expiration_date": ("expirationDate",),
        "current_price": ("currentPrice",),
        "vesting_schedule": ("vestingSchedule",),
    },
    HoldingKind.GENERIC: {},
}

_DATE_FIELDS = {"start_date", "grant_date", "expiration_date"}


def infer_holding_kind(asset_class_name: Optional[str]) -> HoldingKind:
    """
    Guess a holding kind from an asset-class name (case-insensitive).

    Falls back to GENERIC when nothing matches.
    """
    if not asset_class_name:
        return HoldingKind.GENERIC

    lowered = asset_class_name.lower()
    for needles, kind in _CLASS_NAME_RULES:
        if any(needle in lowered for needle in needles):
            return kind
    return HoldingKind.GENERIC


def _as_date(value: Any) -> Any:
    """Legacy dates arrive as ISO strings, dates or datetimes."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) >= 10:
        return date.fromisoformat(value[:10])
    return value


def _first_present(record: dict[str, Any], columns: tuple[str, ...]) -> Any:
    for column in columns:
        value = record.get(column)
        if value is not None:
            return value
    return None


def _expense_map(raw: Any) -> dict[str, dict[str, Any]]:
    """Expense maps are keyed by id; entries without one inherit the key."""
    if not isinstance(raw, dict):
        return {}
    return {
        key: {**entry, "id": entry.get("id") or key}
        for key, entry in raw.items()
        if isinstance(entry, dict)
    }


def _dated_entries(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [
        {**entry, "date": _as_date(entry.get("date"))}
        for entry in raw
        if isinstance(entry, dict)
    ]


def _build_payload(kind: HoldingKind, record: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {"kind": kind.value}

    for field, columns in _PAYLOAD_COLUMNS[kind].items():
        value = _first_present(record, columns)
        if value is None:
            continue
        if field in _DATE_FIELDS:
            value = _as_date(value)
        elif field in ("dividend_history", "vesting_schedule"):
            value = _dated_entries(value)
        payload[field] = value

    if kind == HoldingKind.PROPERTY:
        payload["property_expenses"] = _expense_map(record.get("propertyExpenses"))
        if record.get("hasMortgage"):
            payload["mortgage"] = {
                key: value
                for key, value in {
                    "amount": record.get("mortgageAmount"),
                    "interest_rate": record.get("mortgageInterestRate"),
                    "term_months": record.get("mortgageTerm"),
                    "start_date": _as_date(record.get("mortgageStartDate")),
                    "lender": record.get("mortgageLender"),
                    "rate_type": record.get("mortgageType"),
                    "payment_frequency": record.get("mortgagePaymentFrequency"),
                }.items()
                if value is not None
            }
    elif kind in (HoldingKind.SHARES, HoldingKind.GENERIC):
        payload["investment_expenses"] = _expense_map(record.get("investmentExpenses"))

    return payload


def coerce_holding(
    record: dict[str, Any],
    asset_class: Optional[AssetClass] = None,
) -> Holding:
    """
    Convert a flat camelCase holding row into a Holding.

    The kind comes from, in order: the row's stock-option flag, the asset
    class's explicit `kind` tag, then the asset-class name rules.

    Raises:
        pydantic.ValidationError: If the row cannot form a valid Holding
    """
    if record.get("isStockOption"):
        kind = HoldingKind.STOCK_OPTION
    elif asset_class is not None and asset_class.kind is not None:
        kind = asset_class.kind
    else:
        kind = infer_holding_kind(asset_class.name if asset_class else None)

    envelope = {
        "id": record["id"],
        "user_id": record.get("userId", 0),
        "name": record.get("name") or "Unnamed holding",
        "description": record.get("description"),
        "asset_class_id": record["assetClassId"],
        "holding_type_id": record["assetHoldingTypeId"],
        "value": record.get("value", 0.0),
        "purchase_price": record.get("purchasePrice"),
        "purchase_date": _as_date(record.get("purchaseDate")),
        "growth_rate": record.get("growthRate"),
        "income_yield": record.get("incomeYield"),
        "is_hidden": bool(record.get("isHidden", False)),
        "is_liability": bool(record.get("isLiability", False)),
        "details": _build_payload(kind, record),
    }
    return Holding.model_validate(envelope)
