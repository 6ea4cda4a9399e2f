import logging
from typing import Any, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from propanalyzer.core.config import settings
from propanalyzer.services.inputs import ScenarioInput, funding_end_month, holding_months
from propanalyzer.services.scenario import evaluate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["calculate"])


class _FormModel(BaseModel):
    # camelCase from the web form; raw values are normalized by the calculator
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class AssumptionsIn(_FormModel):
    home_loan_rate: Any = None
    home_loan_term: Any = None
    home_loan_share: Any = None
    home_loan_start_month: Any = None
    home_loan_start_mode: Optional[str] = None
    personal_loan1_rate: Any = None
    personal_loan1_term: Any = None
    personal_loan1_start_month: Any = None
    personal_loan1_share: Any = None
    personal_loan2_rate: Any = None
    personal_loan2_term: Any = None
    personal_loan2_start_month: Any = None
    personal_loan2_share: Any = None
    down_payment_share: Any = None
    investment_period: Any = None
    holding_period_unit: Optional[str] = None
    clp_duration_years: Any = None
    bank_disbursement_start_month: Any = None
    bank_disbursement_interval: Any = None
    last_bank_disbursement_month: Any = None


class PropertyIn(_FormModel):
    id: Any = None
    name: Optional[str] = None
    location: Optional[str] = None
    size: Any = None
    possession_months: Any = None


class CalculateRequest(_FormModel):
    purchase_price: Any = None
    other_charges: Any = None
    stamp_duty: Any = None
    gst_percentage: Any = None
    payment_plan: Optional[str] = None
    assumptions: AssumptionsIn = Field(default_factory=AssumptionsIn)
    selected_property: Optional[PropertyIn] = None
    selected_exit_price: Any = None
    scenario_exit_prices: List[Any] = Field(default_factory=list)


@router.post("/api/calculate")
@router.post("/v1/calculate")
def calculate(req: CalculateRequest) -> dict[str, Any]:
    if not req.purchase_price or req.selected_property is None:
        raise HTTPException(status_code=400, detail="Missing required property data")
    if len(req.scenario_exit_prices) > settings.MAX_SCENARIO_EXIT_PRICES:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.MAX_SCENARIO_EXIT_PRICES} comparison exit prices are supported",
        )

    scenario = ScenarioInput.from_dict(req.model_dump())
    a = scenario.assumptions
    possession = scenario.selected_property.possession_months
    if holding_months(a) > settings.MAX_HOLDING_MONTHS:
        raise HTTPException(
            status_code=400,
            detail=f"Holding period is limited to {settings.MAX_HOLDING_MONTHS} months",
        )
    if max(possession, funding_end_month(a, possession)) > settings.MAX_POSSESSION_MONTHS:
        raise HTTPException(
            status_code=400,
            detail=f"Possession and disbursement months are limited to {settings.MAX_POSSESSION_MONTHS}",
        )

    logger.info(
        "calculate plan=%s exit_price=%s comparisons=%d",
        req.payment_plan,
        req.selected_exit_price,
        len(req.scenario_exit_prices),
    )
    try:
        result = evaluate(scenario)
    except Exception as exc:
        logger.exception("Calculation failed: %s", exc)
        raise HTTPException(status_code=500, detail="Internal Server Error") from exc

    return {"success": True, "data": result}
