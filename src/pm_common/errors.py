"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Market / selection
  4xxx: Simulation input
  9xxx: System / upstream
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, question_id: str) -> None:
        super().__init__(3001, f"Market not found: {question_id}", 404)


class MarketGroupNotFoundError(AppError):
    def __init__(self, group_key: str) -> None:
        super().__init__(3002, f"Market group not found: {group_key}", 404)


class NoMarketSelectedError(AppError):
    def __init__(self) -> None:
        super().__init__(3003, "No market is selected for polling", 409)


# --- 4xxx: Simulation ---

class InvalidSimulationInputError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4010, f"Invalid simulation input: {detail}", 422)


# --- 9xxx: System ---

class UpstreamFetchError(AppError):
    """Transport or HTTP failure talking to the venue. Recoverable."""

    def __init__(self, source: str, detail: str) -> None:
        self.source = source
        super().__init__(9003, f"Upstream fetch failed ({source}): {detail}", 502)
