"""
Best-effort travel-time enrichment for ranked candidates.

One routing call per candidate, all issued concurrently on a shared worker
pool. The whole batch waits at most ``timeout`` seconds; calls still running
after that are abandoned and leave travel_time as None, as does a failed call.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Sequence, Tuple

from django.utils import timezone

from .types import Candidate, TravelTime

logger = logging.getLogger(__name__)

# Long-lived so abandoned calls never block the request that gave up on them
_routing_pool = ThreadPoolExecutor(max_workers=32, thread_name_prefix="travel-time")


class TravelTimeEnricher:

    def __init__(self, client, timeout: float = 5.0, executor=None):
        """
        Args:
            client: Routing client with estimate(origin, destination), or None to disable
            timeout: Seconds to wait for the estimates
            executor: Worker pool for the blocking calls (module pool by default)
        """
        self.client = client
        self.timeout = timeout
        self.executor = executor or _routing_pool

    def enrich(self, origin: Tuple[float, float], candidates: Sequence[Candidate]) -> None:
        """Set travel_time on each candidate in place."""
        if self.client is None or not candidates:
            return

        now = timezone.now()
        futures = {
            self.executor.submit(self.client.estimate, origin, candidate.destination): candidate
            for candidate in candidates
        }
        _, pending = wait(futures, timeout=self.timeout)

        for future, candidate in futures.items():
            if future in pending:
                future.cancel()
                logger.warning("Travel time lookup timed out for order %s", candidate.order.id)
                continue

            error = future.exception()
            if error is not None:
                logger.warning("Error calculating travel time for order %s: %s", candidate.order.id, error)
                continue

            candidate.travel_time = TravelTime.from_estimate(future.result(), now)
