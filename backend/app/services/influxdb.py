"""InfluxDB v2 write client.

Writes time-series points over the v2 HTTP API as line protocol.
Points are sent without timestamps so the server stamps them on arrival.
A single writer is shared by all requests; the underlying httpx client
pools connections and is safe to use concurrently.

API docs: https://docs.influxdata.com/influxdb/v2/api/#operation/PostWrite
"""

import logging
from typing import Optional, Protocol, Sequence

import httpx

from .points import FieldValue, TimeSeriesPoint

logger = logging.getLogger(__name__)

# HTTP timeout for write requests (seconds).
REQUEST_TIMEOUT = 10.0

WRITE_PATH = "/api/v2/write"
HEALTH_PATH = "/health"


class WriteFailure(Exception):
    """The database did not accept a write."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class PointWriter(Protocol):
    """Anything that can persist a batch of points into a bucket."""

    async def write(self, bucket: str, points: Sequence[TimeSeriesPoint]) -> None:
        """Write all points in one request. Raises WriteFailure on error."""
        ...

    async def ping(self) -> bool:
        """Return whether the database is reachable. Never raises."""
        ...


def _escape_measurement(name: str) -> str:
    return name.replace(",", r"\,").replace(" ", r"\ ")


def _escape_key(key: str) -> str:
    return key.replace(",", r"\,").replace("=", r"\=").replace(" ", r"\ ")


def _format_value(value: FieldValue) -> str:
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return f"{value}i"
    return repr(float(value))


def to_line_protocol(point: TimeSeriesPoint) -> str:
    """Render one point as a line-protocol line without timestamp."""
    fields = ",".join(
        f"{_escape_key(name)}={_format_value(value)}"
        for name, value in point.fields
    )
    return f"{_escape_measurement(point.measurement)} {fields}"


class InfluxDBWriter:
    """PointWriter backed by the InfluxDB v2 HTTP write API."""

    def __init__(
        self,
        host: str,
        org: str,
        token: str,
        timeout: float = REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.org = org
        self._client = httpx.AsyncClient(
            base_url=self.host,
            headers={"Authorization": f"Token {token}"},
            timeout=timeout,
            transport=transport,
        )

    async def write(self, bucket: str, points: Sequence[TimeSeriesPoint]) -> None:
        """POST all points as one line-protocol body."""
        body = "\n".join(to_line_protocol(p) for p in points)
        params = {"org": self.org, "bucket": bucket, "precision": "ns"}

        try:
            resp = await self._client.post(
                WRITE_PATH,
                params=params,
                content=body.encode("utf-8"),
                headers={"Content-Type": "text/plain; charset=utf-8"},
            )
        except (httpx.HTTPError, httpx.TimeoutException) as exc:
            raise WriteFailure(f"InfluxDB write request failed: {exc}") from exc

        if resp.status_code // 100 != 2:
            text = resp.text.strip()
            raise WriteFailure(
                f"InfluxDB rejected write ({resp.status_code}): {text}",
                status_code=resp.status_code,
                body=text,
            )

        logger.debug("Wrote %d points to bucket %s", len(points), bucket)

    async def ping(self) -> bool:
        """Check whether the InfluxDB server reports itself healthy."""
        try:
            resp = await self._client.get(HEALTH_PATH)
        except (httpx.HTTPError, httpx.TimeoutException) as exc:
            logger.warning("InfluxDB health check failed: %s", exc)
            return False
        return resp.status_code == 200

    async def aclose(self) -> None:
        await self._client.aclose()
