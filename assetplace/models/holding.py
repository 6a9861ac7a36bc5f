"""
Core Data Models for AssetPlace

These models define the schemas for everything the projection engine reads:
holdings, their asset classes and holding types, recurring expenses, and the
system/user records that drive default configuration.

DESIGN DECISION: A holding is a common envelope (identity, class, type,
value, liability flag) plus ONE class-specific payload, selected by its
`kind` tag. Each payload declares only its own fields and forbids the rest,
so a cash account with bedrooms simply cannot be built.

Percentages (growth rate, yield, interest, vacancy) are stored as entered,
e.g. 4.5 for 4.5%. Conversion to decimals happens in the calculations.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    model_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class HoldingKind(str, Enum):
    """
    What a holding is, decided once at data-entry time.

    Income rules dispatch on this tag rather than on asset-class names.
    """
    PROPERTY = "property"
    CASH = "cash"
    LOAN = "loan"
    SHARES = "shares"
    EMPLOYMENT = "employment"
    STOCK_OPTION = "stock_option"
    GENERIC = "generic"


class ExpenseFrequency(str, Enum):
    """How often a recurring expense is paid."""
    DAILY = "daily"
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi-annual"
    ANNUALLY = "annually"


FREQUENCY_MULTIPLIERS: dict[ExpenseFrequency, int] = {
    ExpenseFrequency.DAILY: 365,
    ExpenseFrequency.WEEKLY: 52,
    ExpenseFrequency.FORTNIGHTLY: 26,
    ExpenseFrequency.MONTHLY: 12,
    ExpenseFrequency.QUARTERLY: 4,
    ExpenseFrequency.SEMI_ANNUAL: 2,
    ExpenseFrequency.ANNUALLY: 1,
}


class RentalFrequency(str, Enum):
    """How often rent is received."""
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"


class PaymentFrequency(str, Enum):
    """Payment cadence for salaries and loan repayments."""
    WEEKLY = "weekly"
    FORTNIGHTLY = "fortnightly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


PAYMENTS_PER_YEAR: dict[PaymentFrequency, int] = {
    PaymentFrequency.WEEKLY: 52,
    PaymentFrequency.FORTNIGHTLY: 26,
    PaymentFrequency.MONTHLY: 12,
    PaymentFrequency.QUARTERLY: 4,
    PaymentFrequency.ANNUALLY: 1,
}


class BonusType(str, Enum):
    """How an employment bonus is specified."""
    NONE = "none"
    FIXED = "fixed"
    PERCENTAGE = "percentage"
    MIXED = "mixed"  # fixed amount plus a percentage of salary


class RateType(str, Enum):
    """Loan interest rate type."""
    FIXED = "fixed"
    VARIABLE = "variable"


class UserMode(str, Enum):
    """Interface mode a user works in."""
    BASIC = "basic"
    ADVANCED = "advanced"


# =============================================================================
# RECURRING EXPENSES
# =============================================================================

class RecurringExpense(BaseModel):
    """
    A recurring cost attached to a holding (rates, insurance, fees...).

    `annual_total` is fixed when the record is created:
    amount x FREQUENCY_MULTIPLIERS[frequency]. A total supplied by the
    upstream normaliser is kept as-is.
    """
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    category_id: str = Field(
        default="uncategorized",
        validation_alias=AliasChoices("category_id", "category", "categoryId"),
    )
    name: str = Field(
        default="Untitled Expense",
        validation_alias=AliasChoices("name", "description"),
    )
    amount: float = Field(..., description="Amount per payment")
    frequency: ExpenseFrequency = ExpenseFrequency.MONTHLY
    notes: Optional[str] = None
    annual_total: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices("annual_total", "annualTotal"),
    )

    @model_validator(mode="after")
    def fill_annual_total(self) -> "RecurringExpense":
        if self.annual_total is None:
            self.annual_total = self.amount * FREQUENCY_MULTIPLIERS[self.frequency]
        return self


ExpenseMap = dict[str, RecurringExpense]


# =============================================================================
# CLASS-SPECIFIC PAYLOADS
# =============================================================================

class HoldingDetails(BaseModel):
    """Base for every payload: strict about unknown fields."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    def expense_maps(self) -> list[ExpenseMap]:
        """Expense maps carried by this payload (none by default)."""
        return []


class MortgageDetails(BaseModel):
    """A mortgage embedded in a property record."""
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    amount: Optional[float] = Field(default=None, ge=0)
    interest_rate: Optional[float] = Field(default=None, ge=0, le=100)
    term_months: int = Field(default=360, ge=1, le=1200)
    start_date: Optional[date] = None
    lender: Optional[str] = None
    rate_type: Optional[RateType] = None
    payment_frequency: Optional[RentalFrequency] = None

    @property
    def is_amortizing(self) -> bool:
        """Both a balance and a rate are needed to derive repayments."""
        return bool(self.amount) and bool(self.interest_rate)


class PropertyDetails(HoldingDetails):
    """Real estate, optionally rented out, optionally mortgaged."""
    kind: Literal["property"] = "property"

    property_type: Optional[str] = None
    address: Optional[str] = None
    suburb: Optional[str] = None
    state: Optional[str] = None
    postcode: Optional[str] = None
    country: Optional[str] = None
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[float] = Field(default=None, ge=0)
    land_size: Optional[float] = Field(default=None, ge=0)
    floor_area: Optional[float] = Field(default=None, ge=0)
    parking_spaces: Optional[int] = Field(default=None, ge=0)

    is_rental: bool = False
    rental_income: Optional[float] = Field(default=None, ge=0)
    rental_frequency: Optional[RentalFrequency] = None
    vacancy_rate: Optional[float] = Field(default=None, ge=0, le=100)

    property_expenses: ExpenseMap = Field(default_factory=dict)
    mortgage: Optional[MortgageDetails] = None

    def expense_maps(self) -> list[ExpenseMap]:
        return [self.property_expenses]


class CashDetails(HoldingDetails):
    """Bank and savings accounts."""
    kind: Literal["cash"] = "cash"

    institution: Optional[str] = None
    account_number: Optional[str] = None
    account_type: Optional[str] = None
    account_purpose: Optional[str] = None
    interest_rate: Optional[float] = Field(default=None, ge=0, le=100)
    is_offset_account: bool = False
    offset_linked_loan_id: Optional[int] = None


class LoanDetails(HoldingDetails):
    """
    A structured loan.

    With both `loan_term` and `start_date` the loan amortizes in projections;
    without them it is treated as a freeform debt.
    """
    kind: Literal["loan"] = "loan"

    provider: Optional[str] = None
    interest_rate: Optional[float] = Field(default=None, ge=0, le=100)
    rate_type: Optional[RateType] = None
    loan_term: Optional[int] = Field(
        default=None,
        ge=1,
        le=1200,
        description="Loan term in months"
    )
    start_date: Optional[date] = None
    payment_frequency: Optional[PaymentFrequency] = None
    payment_amount: Optional[float] = Field(default=None, ge=0)
    original_loan_amount: Optional[float] = Field(default=None, ge=0)

    @property
    def is_amortizing(self) -> bool:
        return self.loan_term is not None and self.start_date is not None


class DividendRecord(BaseModel):
    """A dividend actually received."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    paid_on: date = Field(..., validation_alias=AliasChoices("paid_on", "date"))
    amount: float = Field(..., ge=0)
    franked_amount: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None


class ShareDetails(HoldingDetails):
    """Listed shares."""
    kind: Literal["shares"] = "shares"

    ticker: Optional[str] = None
    exchange: Optional[str] = None
    shares_quantity: Optional[float] = Field(default=None, ge=0)
    current_price: Optional[float] = Field(default=None, ge=0)
    dividend_yield: Optional[float] = Field(default=None, ge=0, le=100)
    dividend_history: list[DividendRecord] = Field(default_factory=list)
    investment_expenses: ExpenseMap = Field(default_factory=dict)

    def expense_maps(self) -> list[ExpenseMap]:
        return [self.investment_expenses]


class EmploymentDetails(HoldingDetails):
    """Salary and bonus from a job."""
    kind: Literal["employment"] = "employment"

    employer: Optional[str] = None
    base_salary: Optional[float] = Field(default=None, ge=0)
    payment_frequency: Optional[PaymentFrequency] = None
    bonus_type: BonusType = BonusType.NONE
    bonus_fixed_amount: Optional[float] = Field(default=None, ge=0)
    bonus_percentage: Optional[float] = Field(default=None, ge=0)
    bonus_likelihood: Optional[float] = Field(default=None, ge=0, le=100)


class VestingEntry(BaseModel):
    """One tranche of an option grant."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    vests_on: date = Field(..., validation_alias=AliasChoices("vests_on", "date"))
    quantity: int = Field(..., ge=0)
    is_vested: bool = False


class StockOptionDetails(HoldingDetails):
    """Employee stock options."""
    kind: Literal["stock_option"] = "stock_option"

    ticker: Optional[str] = None
    exchange: Optional[str] = None
    strike_price: Optional[float] = Field(default=None, ge=0)
    option_quantity: Optional[int] = Field(default=None, ge=0)
    vested_quantity: Optional[int] = Field(default=None, ge=0)
    grant_date: Optional[date] = None
    expiration_date: Optional[date] = None
    current_price: Optional[float] = Field(default=None, ge=0)
    vesting_schedule: list[VestingEntry] = Field(default_factory=list)


class GenericDetails(HoldingDetails):
    """Anything without class-specific rules (super, collectibles, debts...)."""
    kind: Literal["generic"] = "generic"

    investment_expenses: ExpenseMap = Field(default_factory=dict)

    def expense_maps(self) -> list[ExpenseMap]:
        return [self.investment_expenses]


HoldingPayload = Annotated[
    Union[
        PropertyDetails,
        CashDetails,
        LoanDetails,
        ShareDetails,
        EmploymentDetails,
        StockOptionDetails,
        GenericDetails,
    ],
    Field(discriminator="kind"),
]


# =============================================================================
# HOLDING ENVELOPE AND REFERENCE DATA
# =============================================================================

class Holding(BaseModel):
    """
    A single tracked asset or liability.

    Liabilities are flagged with `is_liability`; their magnitude is
    `abs(value)` regardless of the sign the user entered.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int
    user_id: int
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None

    asset_class_id: int
    holding_type_id: int

    value: float = Field(..., ge=-1_000_000_000, le=1_000_000_000)
    purchase_price: Optional[float] = None
    purchase_date: Optional[date] = None

    # Overrides (percentages); None means "use the asset class default"
    growth_rate: Optional[float] = None
    income_yield: Optional[float] = None

    is_hidden: bool = False
    is_liability: bool = False

    details: HoldingPayload = Field(default_factory=GenericDetails)

    @property
    def kind(self) -> HoldingKind:
        return HoldingKind(self.details.kind)

    @property
    def balance(self) -> float:
        """Value with liability sign convention applied (always >= 0 for debts)."""
        return abs(self.value) if self.is_liability else self.value


class AssetClass(BaseModel):
    """
    A category of holdings with default growth scenarios and yield.

    Unset growth defaults fall back to 2% / 5% / 8% for low / medium / high.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    color: Optional[str] = None
    is_liability: bool = False
    kind: Optional[HoldingKind] = Field(
        default=None,
        description="Holding kind new holdings in this class are created with"
    )

    default_low_growth_rate: Optional[float] = None
    default_medium_growth_rate: Optional[float] = None
    default_high_growth_rate: Optional[float] = None
    default_income_yield: Optional[float] = None

    expense_categories: Optional[list[dict[str, Any]]] = None


class HoldingType(BaseModel):
    """Legal/ownership grouping (Personal, Trust, Company...)."""
    model_config = ConfigDict(str_strip_whitespace=True)

    id: int
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    country_id: Optional[int] = None
    tax_settings: Optional[dict[str, Any]] = None  # consumed by the tax layer only


class SystemSettings(BaseModel):
    """Admin-managed defaults relevant to projections."""

    default_basic_mode_years: Optional[int] = Field(default=None, ge=1)
    default_advanced_mode_years: Optional[int] = Field(default=None, ge=1)
    default_low_inflation_rate: Optional[float] = None
    default_medium_inflation_rate: Optional[float] = None
    default_high_inflation_rate: Optional[float] = None


class UserProfile(BaseModel):
    """The parts of a user record projections care about."""

    id: int
    preferred_mode: UserMode = UserMode.BASIC
    age: Optional[int] = Field(default=None, ge=0, le=150)
    target_retirement_age: Optional[int] = Field(default=None, ge=0, le=150)
