"""HTTP entrypoint exposing city resolution and gazetteer lookups."""

from __future__ import annotations

import logging
import os
from typing import Any, Dict

from flask import Flask, jsonify, request

from city_resolver.core.config import get_settings
from city_resolver.core.resolver import ResolutionError, get_resolver

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    """Lightweight health endpoint; does not trigger a sheet fetch."""
    settings = get_settings()
    snapshot = get_resolver().cache.snapshot
    return (
        jsonify(
            {
                "status": "ok",
                "cache_ttl_seconds": settings.cache_ttl_seconds,
                "cities_cached": len(snapshot.records) if snapshot else 0,
                "cities_source": snapshot.source if snapshot else None,
                "revision": os.getenv("K_REVISION", "unknown"),
            }
        ),
        200,
    )


@app.post("/resolve")
def resolve_address() -> Any:
    """
    Detect the delivery city for a multi-line address.
    Required JSON fields: address
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    address = payload.get("address")
    if not isinstance(address, str) or not address.strip():
        return jsonify({"error": "address is required"}), 400

    try:
        city = get_resolver().resolve_city(address)
    except ResolutionError as exc:
        return jsonify({"error": str(exc)}), 400
    except Exception as exc:  # noqa: BLE001
        logger.exception("City resolution failed: %s", exc)
        return jsonify({"error": "resolution failed"}), 500

    return jsonify({"data": {"city": city.to_dict() if city else None}}), 200


@app.get("/cities")
def search_cities() -> Any:
    query = request.args.get("q", "")
    cities = get_resolver().search_cities(query)
    return jsonify({"data": [city.to_dict() for city in cities]}), 200


@app.get("/cities/<name>")
def city_by_name(name: str) -> Any:
    city = get_resolver().get_city_by_name(name)
    if city is None:
        return jsonify({"error": f"city not found: {name}"}), 404
    return jsonify({"data": city.to_dict()}), 200


@app.get("/districts")
def list_districts() -> Any:
    return jsonify({"data": get_resolver().get_districts()}), 200


@app.get("/zones")
def list_zones() -> Any:
    return jsonify({"data": get_resolver().get_zones()}), 200


@app.post("/refresh")
def refresh_gazetteer() -> Any:
    """Reload the city sheet. Optional JSON: force (bool, default true)."""
    payload: Dict[str, Any] = request.get_json(silent=True) or {}
    force = bool(payload.get("force", True))

    resolver = get_resolver()
    resolver.refresh_gazetteer(force=force)
    snapshot = resolver.cache.snapshot
    return jsonify({"data": {"cities": len(snapshot.records), "source": snapshot.source}}), 200


def main() -> None:
    port = int(os.getenv("PORT") or get_settings().resolver_port)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
