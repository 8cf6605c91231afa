import logging
import os
from dataclasses import fields

from flask import Flask, jsonify, render_template, request

from pinjaman_calc.config import (
    DEFAULT_AMOUNT,
    DEFAULT_METHOD,
    DEFAULT_RATE,
    DEFAULT_TERM,
    DEFAULT_TERM_UNIT,
    MAX_PREVIEW_ROWS,
)
from pinjaman_calc.data_models import METHODS, Invalid, RawLoanInput
from pinjaman_calc.export import serialize_state
from pinjaman_calc.formatter import METHOD_LABELS, build_summary_rows, format_currency, format_decimal
from pinjaman_calc.summary import compute_loan_summaries, interest_delta, select_summary
from pinjaman_calc.utils import parse_currency_input

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.config["MAX_ROWS"] = int(os.environ.get("PINJAMAN_MAX_ROWS", MAX_PREVIEW_ROWS))
app.add_template_filter(format_currency, "rupiah")
app.add_template_filter(format_decimal, "decimal")

RAW_INPUT_FIELDS = tuple(f.name for f in fields(RawLoanInput))

DEFAULT_FORM = {
    "amount": format_currency(DEFAULT_AMOUNT),
    "rate": str(DEFAULT_RATE),
    "term": str(DEFAULT_TERM),
    "term_unit": DEFAULT_TERM_UNIT,
    "intro_discount_rate": "0",
    "intro_discount_months": "0",
    "provision_rate": "0",
    "method": DEFAULT_METHOD,
}


def _normalized_method(values) -> str:
    method = (values.get("method") or DEFAULT_METHOD).lower()
    return method if method in METHODS else DEFAULT_METHOD


def _form_to_raw_input(form) -> RawLoanInput:
    # The amount box holds formatted text such as "Rp 150.000.000"
    return RawLoanInput(
        amount=parse_currency_input(form.get("amount", "")),
        rate=form.get("rate", ""),
        term=form.get("term", ""),
        term_unit=form.get("term_unit", DEFAULT_TERM_UNIT),
        include_intro_discount=form.get("include_intro_discount", False),
        intro_discount_rate=form.get("intro_discount_rate", 0),
        intro_discount_months=form.get("intro_discount_months", 0),
        include_provision=form.get("include_provision", False),
        provision_rate=form.get("provision_rate", 0),
    )


def _schedule_for_view(schedule, max_rows: int):
    """Return the rows to render and how many were left out."""
    preview = schedule[:max_rows]
    return preview, len(schedule) - len(preview)


@app.route("/", methods=["GET", "POST"])
def index():
    state = None
    error = None
    summary_rows = []
    schedule = []
    truncated = 0
    delta = None
    method = DEFAULT_METHOD
    form_values = dict(DEFAULT_FORM)

    if request.method == "POST":
        method = _normalized_method(request.form)
        form_values.update(request.form.to_dict())
        result = compute_loan_summaries(_form_to_raw_input(request.form))
        if isinstance(result, Invalid):
            error = result.reason
        else:
            state = result
            summary_rows = build_summary_rows(state, method)
            schedule, truncated = _schedule_for_view(
                select_summary(state, method).schedule, app.config["MAX_ROWS"]
            )
            delta = interest_delta(state.flat, state.effective)

    return render_template(
        "index.html",
        state=state,
        error=error,
        method=method,
        method_labels=METHOD_LABELS,
        summary_rows=summary_rows,
        schedule=schedule,
        truncated=truncated,
        interest_delta=delta,
        form=form_values,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/api/calculate")
def api_calculate():
    """Calculate both schedules from a JSON body.

    The body uses the ``RawLoanInput`` field names; missing fields take the
    form defaults. Invalid input yields HTTP 400 with an ``error`` message.
    """
    if not request.is_json:
        return jsonify({"error": "Invalid Content-Type. Must be application/json."}), 400
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object."}), 400

    raw = RawLoanInput(**{name: data[name] for name in RAW_INPUT_FIELDS if name in data})
    result = compute_loan_summaries(raw)
    if isinstance(result, Invalid):
        logger.info("Rejected API calculation: %s", result.reason)
        return jsonify({"error": result.reason}), 400
    return jsonify(serialize_state(result))


if __name__ == "__main__":
    print("Starting Loan Calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
