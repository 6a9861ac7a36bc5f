"""
Shared fixtures: a small household balance sheet.

One rented property, one savings account and one amortizing mortgage,
priced as of 1 January 2025.
"""

from datetime import date

import pytest

from assetplace.models import (
    AssetClass,
    CashDetails,
    Holding,
    HoldingKind,
    HoldingType,
    LoanDetails,
    PropertyDetails,
    UserProfile,
)


AS_OF = date(2025, 1, 1)

PROPERTY_CLASS_ID = 1
CASH_CLASS_ID = 2
LOAN_CLASS_ID = 3

PERSONAL_TYPE_ID = 1
TRUST_TYPE_ID = 2


@pytest.fixture
def asset_classes() -> list[AssetClass]:
    return [
        AssetClass(
            id=PROPERTY_CLASS_ID,
            name="Property",
            kind=HoldingKind.PROPERTY,
            default_low_growth_rate=3.0,
            default_medium_growth_rate=5.0,
            default_high_growth_rate=7.0,
        ),
        AssetClass(
            id=CASH_CLASS_ID,
            name="Cash",
            kind=HoldingKind.CASH,
            default_low_growth_rate=1.0,
            default_medium_growth_rate=2.0,
            default_high_growth_rate=3.0,
        ),
        AssetClass(
            id=LOAN_CLASS_ID,
            name="Loans",
            kind=HoldingKind.LOAN,
            is_liability=True,
            default_medium_growth_rate=0.0,
        ),
    ]


@pytest.fixture
def holding_types() -> list[HoldingType]:
    return [
        HoldingType(id=PERSONAL_TYPE_ID, name="Personal"),
        HoldingType(id=TRUST_TYPE_ID, name="Family Trust"),
    ]


@pytest.fixture
def rental_property() -> Holding:
    return Holding(
        id=1,
        user_id=1,
        name="Investment Property",
        asset_class_id=PROPERTY_CLASS_ID,
        holding_type_id=PERSONAL_TYPE_ID,
        value=500000,
        growth_rate=4.5,
        details=PropertyDetails(
            is_rental=True,
            rental_income=2000,
            rental_frequency="monthly",
            vacancy_rate=5,
        ),
    )


@pytest.fixture
def savings_account() -> Holding:
    return Holding(
        id=2,
        user_id=1,
        name="Savings Account",
        asset_class_id=CASH_CLASS_ID,
        holding_type_id=TRUST_TYPE_ID,
        value=50000,
        details=CashDetails(interest_rate=2.5),
    )


@pytest.fixture
def home_loan() -> Holding:
    return Holding(
        id=3,
        user_id=1,
        name="Home Loan",
        asset_class_id=LOAN_CLASS_ID,
        holding_type_id=PERSONAL_TYPE_ID,
        value=300000,
        is_liability=True,
        details=LoanDetails(
            provider="Big Bank",
            interest_rate=4.0,
            loan_term=360,
            start_date=date(2020, 1, 1),
            original_loan_amount=300000,
        ),
    )


@pytest.fixture
def portfolio(rental_property, savings_account, home_loan) -> list[Holding]:
    return [rental_property, savings_account, home_loan]


@pytest.fixture
def user() -> UserProfile:
    return UserProfile(id=1, age=40, target_retirement_age=65)
