import time
import logging
from typing import Callable, Dict, Optional
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from statistics import median

from patent_search.core.config import settings

logger = logging.getLogger(__name__)

# Keep only the most recent samples per endpoint
MAX_SAMPLES = 1000
UNMATCHED = "unmatched"
KNOWN_METHODS = {"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"}


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Times every request, logs it and keeps per-endpoint aggregates in memory."""

    def __init__(self, app, stats_interval: Optional[int] = None, slow_seconds: Optional[float] = None):
        super().__init__(app)
        self.endpoints_stats: Dict[str, dict] = {}
        self.stats_interval = stats_interval or settings.STATS_INTERVAL
        self.slow_seconds = settings.SLOW_REQUEST_SECONDS if slow_seconds is None else slow_seconds
        self.requests_count = 0

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        endpoint_key = self.endpoint_key(request)
        self._record(endpoint_key, process_time)

        log_message = (
            f"{request.method} {request.url.path} -> {response.status_code} in {process_time:.3f}s"
        )
        if process_time > self.slow_seconds:
            logger.warning(f"SLOW {log_message}")
        else:
            logger.info(log_message)

        self.requests_count += 1
        if self.requests_count % self.stats_interval == 0:
            self.log_stats_report()

        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response

    @staticmethod
    def endpoint_key(request: Request) -> str:
        """
        Stats bucket for a request: method plus route template, so that
        /api/patents/A and /api/patents/B share one entry. Unrouted paths and
        unknown methods each collapse into a single bucket.
        """
        route = request.scope.get("route")
        path = getattr(route, "path", None)
        if not path:
            return UNMATCHED
        method = request.method if request.method in KNOWN_METHODS else "OTHER"
        return f"{method}:{path}"

    def _record(self, endpoint_key: str, process_time: float) -> None:
        stats = self.endpoints_stats.setdefault(
            endpoint_key,
            {"times": [], "count": 0, "total_time": 0.0, "min_time": float("inf"), "max_time": 0.0},
        )
        stats["times"].append(process_time)
        stats["count"] += 1
        stats["total_time"] += process_time
        stats["min_time"] = min(stats["min_time"], process_time)
        stats["max_time"] = max(stats["max_time"], process_time)

        if len(stats["times"]) > MAX_SAMPLES:
            stats["times"] = stats["times"][-MAX_SAMPLES:]

    def stats_summary(self) -> Dict[str, dict]:
        summary = {}
        for endpoint_key, stats in self.endpoints_stats.items():
            if not stats["count"]:
                continue
            sorted_times = sorted(stats["times"])
            p95_index = min(int(len(sorted_times) * 0.95), len(sorted_times) - 1)
            summary[endpoint_key] = {
                "count": stats["count"],
                "avg_time": stats["total_time"] / stats["count"],
                "min_time": stats["min_time"],
                "max_time": stats["max_time"],
                "median": median(sorted_times),
                "p95": sorted_times[p95_index],
            }
        return summary

    def log_stats_report(self) -> None:
        summary = self.stats_summary()
        slowest = sorted(summary.items(), key=lambda item: item[1]["avg_time"], reverse=True)[:5]

        logger.info(f"Request statistics after {self.requests_count} requests")
        for endpoint, stats in slowest:
            logger.info(
                f"{endpoint}: {stats['count']} requests, avg {stats['avg_time']:.3f}s, "
                f"p95 {stats['p95']:.3f}s"
            )
