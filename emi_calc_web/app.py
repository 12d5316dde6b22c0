import logging
from functools import lru_cache

from flask import Flask, jsonify, request

from emi_calc.advisor import fetch_advice
from emi_calc.config import get_settings
from emi_calc.data_models import LoanSummary
from emi_calc.engine import compute_schedule, compute_summary
from emi_calc.formatter import chart_points, payment_breakdown, schedule_rows
from emi_calc.utils import parse_amount, parse_rate, parse_tenure, parse_year_month

logger = logging.getLogger(__name__)

settings = get_settings()
app = Flask(__name__)

PREVIEW_ROWS = 120


@lru_cache(maxsize=256)
def _cached_summary(principal: float, rate: float, tenure: int) -> LoanSummary:
    return compute_summary(principal, rate, tenure)


def _form_to_terms(form):
    principal = parse_amount(form.get("principal", ""))
    rate = parse_rate(form.get("rate", ""))
    tenure = parse_tenure(form.get("tenure", ""))
    start_date = form.get("start_date", "").strip()
    start_dt = parse_year_month(start_date) if start_date else None
    return principal, rate, tenure, start_dt


def _schedule_for_view(rows: list, show_full_schedule: bool):
    if show_full_schedule or len(rows) <= PREVIEW_ROWS:
        return rows, 0
    return rows[:PREVIEW_ROWS], len(rows) - PREVIEW_ROWS


def _bad_request(exc: Exception):
    logger.info("Rejected loan request: %s", exc)
    return jsonify({"error": str(exc)}), 400


@app.route("/api/loan", methods=["GET", "POST"])
def loan():
    show_full_schedule = request.values.get("full_schedule") == "1"
    try:
        principal, rate, tenure, start_dt = _form_to_terms(request.values)
        summary = _cached_summary(principal, rate, tenure)
        schedule = compute_schedule(principal, rate, tenure, summary.monthly_payment, start_dt)
    except ValueError as exc:
        return _bad_request(exc)

    rows, truncated = _schedule_for_view(schedule_rows(schedule), show_full_schedule)
    return jsonify(
        {
            "summary": summary.to_dict(),
            "breakdown": payment_breakdown(summary),
            "chart": schedule_rows(chart_points(schedule)),
            "schedule": rows,
            "truncated": truncated,
        }
    )


@app.route("/api/advice", methods=["GET", "POST"])
def advice():
    try:
        principal, rate, tenure, _ = _form_to_terms(request.values)
        summary = _cached_summary(principal, rate, tenure)
    except ValueError as exc:
        return _bad_request(exc)
    result = fetch_advice(principal, rate, tenure, summary.monthly_payment, settings=settings)
    return jsonify({"monthly_payment": summary.monthly_payment, **result.to_dict()})


@app.get("/healthz")
def healthz():
    return jsonify({"status": "ok"})


if __name__ == "__main__":
    logging.basicConfig(level=settings.EMI_LOG_LEVEL)
    print("Starting EMI calculator API...")
    app.run(host="0.0.0.0", port=settings.PORT, debug=True)
