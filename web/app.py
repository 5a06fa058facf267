"""Flask JSON API for warranty repair-days lookups."""

import time
from datetime import date, datetime, timezone
from typing import Any, Dict, List

from flask import Flask, Response, g, jsonify, request

from warranty import (
    InvalidDateError,
    InvalidVehicleFileError,
    PeriodResult,
    RepairOrder,
    VehicleNotFoundError,
    WarrantyReport,
    build_warranty_report,
    find_vehicle,
    normalize,
)
from warranty.config import load_config
from warranty.observability import get_logger, setup_logging

config = load_config()
setup_logging(config.log_level, config.app_env)
logger = get_logger("http")

app = Flask(__name__)
app.config["VEHICLES_DIR"] = config.vehicles_dir
# Reference clock; replaced in tests for reproducible "now"
app.config["CLOCK"] = lambda: datetime.now(timezone.utc)


def format_date(d: date) -> str:
    """Dates go out as ISO calendar dates."""
    return d.isoformat()


def order_to_json(order: RepairOrder) -> Dict[str, Any]:
    """Full repair order, as listed by /claims."""
    return {
        "id": order.id,
        "retail_date": format_date(order.retail_date),
        "ro_open_date": format_date(order.open_date),
        "ro_close_date": format_date(order.close_date),
        "notes": order.notes,
    }


def period_to_json(result: PeriodResult) -> Dict[str, Any]:
    """One warranty year with its clipped repair days."""
    return {
        "warranty_period": {
            "start": format_date(result.period.start),
            "end": format_date(result.period.end),
        },
        "total_days": result.total_days,
        "items": [
            {
                "claim": {
                    "id": item.order.id,
                    "ro_open_date": format_date(item.order.open_date),
                    "ro_close_date": format_date(item.order.close_date),
                },
                "repair_days": item.repair_days,
            }
            for item in result.items
        ],
    }


def report_to_json(report: WarrantyReport) -> Dict[str, Any]:
    return {
        "vin": report.vin,
        "retail_date": format_date(report.retail_date),
        "periods": [period_to_json(p) for p in report.periods],
        "skipped_claim_ids": report.skipped_order_ids,
    }


def text_response(message: str, status: int) -> Response:
    """Plain-text body, used for health and error responses."""
    return Response(message, status=status, mimetype="text/plain")


def get_vin() -> str:
    return request.args.get("vin", "").strip()


@app.before_request
def start_timer():
    g.started_at = time.perf_counter()


@app.after_request
def log_request(response: Response) -> Response:
    """Log every HTTP request with method, path, status and duration."""
    started_at = g.get("started_at", time.perf_counter())
    log_data = {
        "method": request.method,
        "path": request.path,
        "query": request.query_string.decode("utf-8", "replace"),
        "status": response.status_code,
        "duration_ms": round((time.perf_counter() - started_at) * 1000, 2),
        "remote_addr": request.remote_addr,
    }
    if response.status_code >= 500:
        logger.error("http request", **log_data)
    else:
        logger.info("http request", **log_data)
    return response


@app.route("/health")
def health():
    return text_response("ok", 200)


@app.route("/claims")
def claims_by_vin():
    """All repair orders on file for a VIN, highest id first."""
    vin = get_vin()
    if not vin:
        logger.warning("vin query param is missing", path=request.path)
        return text_response(
            "vin query param is required, example: /claims?vin=XXX", 400
        )

    try:
        _, vehicle = find_vehicle(app.config["VEHICLES_DIR"], vin)
    except VehicleNotFoundError:
        logger.info("vehicle not found for vin", vin=vin)
        return text_response("claims not found for vin", 404)
    except (InvalidDateError, InvalidVehicleFileError) as e:
        logger.warning("vehicle file is invalid", vin=vin, error=str(e))
        return text_response(str(e), 400)

    orders: List[RepairOrder] = vehicle.get_orders_sorted(sort_by="id", reverse=True)
    return jsonify([order_to_json(o) for o in orders])


@app.route("/claims/warranty-year")
def warranty_year_claims():
    """Repair days per warranty year for a VIN, newest year first."""
    vin = get_vin()
    if not vin:
        logger.warning("vin query param is missing", path=request.path)
        return text_response(
            "vin query param is required, example: /claims/warranty-year?vin=XXX", 400
        )

    try:
        raw_now = request.args.get("now")
        now = normalize(raw_now) if raw_now else normalize(app.config["CLOCK"]())
        _, vehicle = find_vehicle(app.config["VEHICLES_DIR"], vin)
        report = build_warranty_report(vehicle, now)
    except VehicleNotFoundError:
        logger.info("claims not found for vin", vin=vin)
        return text_response("claims not found for vin", 404)
    except (InvalidDateError, InvalidVehicleFileError) as e:
        logger.warning("invalid warranty-year request", vin=vin, error=str(e))
        return text_response(str(e), 400)

    return jsonify(report_to_json(report))


if __name__ == "__main__":
    app.run(
        debug=config.app_env == "development",
        host=config.http_host,
        port=config.http_port,
    )
