from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Any

from fastapi import Body, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

from rarity.normalize import normalize
from rarity.salvage import UnparsableResponse, salvage_parse
from rarity.summary import summarize_records
from service.logging_config import classification_extra, configure_logging, correlation_id, new_correlation_id
from service.oracle import ClassificationOracle
from service.settings import ServiceSettings

logger = logging.getLogger(__name__)

RAW_DETAIL_LIMIT = 500


# ── Request / Response Models ───────────────────────────────────────

class ClassifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    image_base64: str | None = Field(default=None, alias="imageBase64")
    image: str | None = None

    @property
    def payload(self) -> str | None:
        return self.image_base64 or self.image


class BatchNormalizeRequest(BaseModel):
    records: list[dict[str, Any]]


class HealthResponse(BaseModel):
    status: str


# ── In-process Metrics ──────────────────────────────────────────────

_counters: dict[str, int] = defaultdict(int)
_latencies: dict[str, list[float]] = defaultdict(list)


def _record_latency(name: str, seconds: float) -> None:
    _latencies[name].append(seconds)
    _counters[f"{name}_count"] += 1


def _percentile_ms(values: list[float], q: float) -> float:
    if not values:
        return 0.0
    ordered = sorted(values)
    return round(ordered[min(int(len(ordered) * q), len(ordered) - 1)] * 1000, 1)


def _envelope(status_code: int, **fields: Any) -> JSONResponse:
    body = {"success": status_code < 400}
    body.update({k: v for k, v in fields.items() if v is not None})
    return JSONResponse(status_code=status_code, content=body)


# ── App Factory ─────────────────────────────────────────────────────

def create_app(settings: ServiceSettings | None = None) -> FastAPI:
    settings = settings or ServiceSettings()
    configure_logging(level=settings.log_level, fmt=settings.log_format)

    oracle = ClassificationOracle(
        api_key=settings.oracle_api_key,
        base_url=settings.oracle_base_url,
        model=settings.oracle_model,
        timeout_seconds=settings.oracle_timeout_seconds,
    )

    app = FastAPI(title="Car Rarity Classification API", version="0.1.0")

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next: Any) -> Response:
        cid = request.headers.get("X-Correlation-ID") or new_correlation_id()
        correlation_id.set(cid)
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = cid
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 405:
            return _envelope(405, error="Method not allowed")
        return _envelope(exc.status_code, error=str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
        return _envelope(400, error="Invalid request body", detail=str(exc.errors()))

    # ── Classification ──────────────────────────────────────────────

    @app.post("/classify")
    async def classify(req: ClassifyRequest | None = None) -> JSONResponse:
        t0 = time.monotonic()
        image = req.payload if req is not None else None
        if not image:
            _counters["classify_rejected"] += 1
            return _envelope(400, error="No image provided")
        if len(image) > settings.max_image_bytes:
            _counters["classify_rejected"] += 1
            return _envelope(413, error="Image too large")

        size_kb = round(len(image) / 1024)
        logger.info("Classification request received", extra=classification_extra(received_kb=size_kb))

        try:
            result = await oracle.classify(image)
            if result.error is not None or result.text is None:
                _counters["oracle_failures"] += 1
                return _envelope(502, error="Classification service unavailable", detail=result.error)

            try:
                raw = salvage_parse(result.text)
            except UnparsableResponse as exc:
                _counters["unparsable_responses"] += 1
                logger.warning(
                    "Oracle response could not be parsed",
                    extra=classification_extra(oracle_source=result.source, extra_data={"raw": str(exc.raw)[:RAW_DETAIL_LIMIT]}),
                )
                return _envelope(
                    502,
                    error="Unparsable classification response",
                    detail=str(exc.raw)[:RAW_DETAIL_LIMIT],
                )

            car = normalize(raw)
        except Exception:
            _counters["classify_errors"] += 1
            logger.exception("Classification failed")
            return _envelope(500, error="Internal server error")

        _record_latency("classify", time.monotonic() - t0)
        _counters[f"tier_{car.rarity_tier.lower()}"] += 1
        logger.info(
            "Classified %s",
            car.car_slug or "unknown vehicle",
            extra=classification_extra(car, oracle_source=result.source),
        )
        return _envelope(200, car=car.to_dict())

    @app.post("/normalize")
    async def normalize_record(raw: dict[str, Any] = Body(...)) -> JSONResponse:
        car = normalize(raw)
        _counters["normalize_count"] += 1
        return _envelope(200, car=car.to_dict())

    @app.post("/normalize/batch")
    async def normalize_batch(req: BatchNormalizeRequest) -> JSONResponse:
        if len(req.records) > settings.max_batch_size:
            return _envelope(413, error="Batch too large", detail=f"limit is {settings.max_batch_size} records")
        t0 = time.monotonic()
        cars = [normalize(raw) for raw in req.records]
        _record_latency("normalize_batch", time.monotonic() - t0)
        return _envelope(
            200,
            cars=[car.to_dict() for car in cars],
            summary=summarize_records(cars),
        )

    # ── Health / Metrics ────────────────────────────────────────────

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/metrics")
    async def get_metrics() -> dict[str, Any]:
        latencies = _latencies.get("classify", [])
        return {
            "counters": dict(_counters),
            "classify_latency": {
                "count": len(latencies),
                "p50_ms": _percentile_ms(latencies, 0.50),
                "p95_ms": _percentile_ms(latencies, 0.95),
                "p99_ms": _percentile_ms(latencies, 0.99),
            },
        }

    return app


app = create_app()
