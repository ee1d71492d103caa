"""HTTP routes for the Flask API."""

import logging
import sqlite3
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from sipcalc.core.export import timeline_to_csv
from sipcalc.core.projection import calculate, compare_plans
from sipcalc.core.rates import ANNUAL_RATES, ESCALATING_ANNUAL_RATE, FREEFORM_ANNUAL_RATE
from sipcalc.core.tax import estimate_tax
from sipcalc.schemas.plan import CalculationRequest, ComparisonRequest, TaxRequest
from sipcalc.schemas.projection import ProjectionResult
from sipcalc.schemas.storage import PreferencesUpdate, SaveCalculationRequest
from sipcalc.storage import DraftCache, HistoryImportError, HistoryStore, PreferenceStore

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _json_body() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _flag(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"", "0", "false", "no", "off"}:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _history() -> HistoryStore:
    return HistoryStore(current_app.config["DB_PATH"])


def _not_found(calculation_id: str):
    return jsonify({"detail": f"calculation {calculation_id} not found"}), HTTPStatus.NOT_FOUND


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.errorhandler(sqlite3.Error)
def _handle_storage_error(exc: sqlite3.Error):
    logger.exception("Local storage failed")
    return jsonify({"detail": "local storage is unavailable"}), HTTPStatus.SERVICE_UNAVAILABLE


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    return jsonify({"message": "pong"})


@api_bp.get("/rates")
def rates() -> Any:
    return jsonify(
        {
            "categories": {category.value: rate for category, rate in ANNUAL_RATES.items()},
            "escalating": ESCALATING_ANNUAL_RATE,
            "freeform": FREEFORM_ANNUAL_RATE,
        }
    )


@api_bp.post("/calc")
def calc() -> Any:
    payload = CalculationRequest.model_validate(_json_body())
    return jsonify(calculate(payload.plan).model_dump())


@api_bp.post("/calc/compare")
def compare() -> Any:
    payload = ComparisonRequest.model_validate(_json_body())
    results = compare_plans(
        payload.amount,
        payload.years,
        escalation_rate=payload.escalationRate,
        inflation_rate=payload.inflationRate,
    )
    return jsonify([result.model_dump() for result in results])


@api_bp.post("/calc/tax")
def tax() -> Any:
    payload = TaxRequest.model_validate(_json_body())
    return jsonify(estimate_tax(payload.growth, payload.years, payload.fundType).model_dump())


@api_bp.post("/calc/export.csv")
def export_csv() -> Any:
    payload = CalculationRequest.model_validate(_json_body())
    result = calculate(payload.plan)
    if not isinstance(result, ProjectionResult):
        return jsonify({"detail": "goal plans have no timeline to export"}), HTTPStatus.BAD_REQUEST
    return Response(
        timeline_to_csv(result),
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename=sip-{result.kind}.csv"},
    )


@api_bp.get("/history")
def list_history() -> Any:
    limit = request.args.get("limit", type=int)
    if request.args.get("summary", default=False, type=_flag):
        return jsonify(_history().summaries(limit=limit or 10))
    return jsonify(_history().list(limit=limit))


@api_bp.post("/history")
def save_history() -> Any:
    payload = SaveCalculationRequest.model_validate(_json_body())
    result = calculate(payload.plan)
    calculation_id = _history().save(
        payload.plan.kind,
        payload.plan.model_dump(mode="json"),
        result.model_dump(mode="json"),
    )
    return jsonify({"id": calculation_id, "result": result.model_dump()}), HTTPStatus.CREATED


@api_bp.delete("/history")
def clear_history() -> Any:
    _history().clear()
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/history/stats")
def history_stats() -> Any:
    return jsonify(_history().stats())


@api_bp.get("/history/export")
def export_history() -> Any:
    return Response(
        _history().export_json(),
        mimetype="application/json",
        headers={"Content-Disposition": "attachment; filename=sip-calculations.json"},
    )


@api_bp.post("/history/import")
def import_history() -> Any:
    try:
        imported = _history().import_json(request.get_data(as_text=True))
    except HistoryImportError as exc:
        return jsonify({"detail": str(exc)}), HTTPStatus.BAD_REQUEST
    return jsonify({"imported": imported})


@api_bp.get("/history/<calculation_id>")
def get_history(calculation_id: str) -> Any:
    record = _history().get(calculation_id)
    if record is None:
        return _not_found(calculation_id)
    return jsonify(record)


@api_bp.delete("/history/<calculation_id>")
def delete_history(calculation_id: str) -> Any:
    if not _history().delete(calculation_id):
        return _not_found(calculation_id)
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/draft")
def load_draft() -> Any:
    draft = DraftCache(current_app.config["DB_PATH"]).load()
    if draft is None:
        return jsonify({"detail": "no draft saved"}), HTTPStatus.NOT_FOUND
    return jsonify(draft)


@api_bp.put("/draft")
def save_draft() -> Any:
    fields = _json_body()
    if not isinstance(fields, dict):
        return jsonify({"detail": "draft must be a JSON object"}), HTTPStatus.BAD_REQUEST
    saved_at = DraftCache(current_app.config["DB_PATH"]).save(fields)
    return jsonify({"savedAt": saved_at})


@api_bp.delete("/draft")
def clear_draft() -> Any:
    DraftCache(current_app.config["DB_PATH"]).clear()
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/preferences")
def get_preferences() -> Any:
    return jsonify(PreferenceStore(current_app.config["DB_PATH"]).get())


@api_bp.patch("/preferences")
def update_preferences() -> Any:
    changes = PreferencesUpdate.model_validate(_json_body())
    store = PreferenceStore(current_app.config["DB_PATH"])
    return jsonify(store.update(changes.model_dump(exclude_none=True)))
