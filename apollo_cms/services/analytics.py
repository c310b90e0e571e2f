"""Seven-day web analytics summary from the Google Analytics Data API.

The dashboard widget renders whatever comes back, so failures are returned as
``{"error": CODE, "message": ...}`` instead of raised.
"""
from __future__ import annotations

import json
import logging
from datetime import date, timedelta
from typing import Any

from google.analytics.data_v1beta import BetaAnalyticsDataClient
from google.analytics.data_v1beta.types import DateRange, Dimension, Metric, OrderBy, RunReportRequest
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from apollo_cms.core.config import settings

logger = logging.getLogger(__name__)

GA_SCOPE = "https://www.googleapis.com/auth/analytics.readonly"
REPORT_DAYS = 7
TOP_PAGES_LIMIT = 5
TOTAL_METRICS = ("activeUsers", "newUsers", "screenPageViews")

MISSING_GA_PROPERTY_ID = "MISSING_GA_PROPERTY_ID"
MISSING_CREDENTIALS_STRING = "MISSING_CREDENTIALS_STRING"
INVALID_CREDENTIALS_JSON = "INVALID_CREDENTIALS_JSON"
GA_CLIENT_INIT_ERROR = "GA_CLIENT_INIT_ERROR"
GA_API_ERROR = "GA_API_ERROR"


class AnalyticsError(Exception):
    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def as_dict(self) -> dict[str, str]:
        return {"error": self.code, "message": self.message}


def _load_credentials() -> dict[str, Any]:
    raw = str(settings.GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING or "").strip()
    if not raw:
        raise AnalyticsError(
            MISSING_CREDENTIALS_STRING,
            "GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING environment variable is not set.",
        )
    try:
        credentials = json.loads(raw)
    except ValueError:
        raise AnalyticsError(INVALID_CREDENTIALS_JSON, "Invalid GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING format.")
    if not isinstance(credentials, dict):
        raise AnalyticsError(INVALID_CREDENTIALS_JSON, "Invalid GOOGLE_APPLICATION_CREDENTIALS_JSON_STRING format.")
    return credentials


def _build_client(info: dict[str, Any]) -> BetaAnalyticsDataClient:
    try:
        credentials = service_account.Credentials.from_service_account_info(info, scopes=[GA_SCOPE])
        return BetaAnalyticsDataClient(credentials=credentials)
    except (ValueError, KeyError, GoogleAuthError) as exc:
        logger.warning("ga_client_init_failed client_email=%s error=%s", info.get("client_email"), exc)
        raise AnalyticsError(GA_CLIENT_INIT_ERROR, f"Failed to initialize GA client: {exc}") from exc


def _report_request(property_id: str, date_range: DateRange, **extra) -> RunReportRequest:
    return RunReportRequest(property=f"properties/{property_id}", date_ranges=[date_range], **extra)


def _first_metric(report) -> str:
    if not report.rows or not report.rows[0].metric_values:
        return "0"
    return report.rows[0].metric_values[0].value or "0"


def fetch_ga_summary(today: date | None = None) -> dict[str, Any]:
    property_id = str(settings.GA_PROPERTY_ID or "").strip()
    if not property_id:
        return AnalyticsError(MISSING_GA_PROPERTY_ID, "GA_PROPERTY_ID environment variable is not set.").as_dict()

    end = today or date.today()
    date_range = DateRange(start_date=(end - timedelta(days=REPORT_DAYS)).isoformat(), end_date=end.isoformat())
    timeout = float(settings.GA_TIMEOUT_SECONDS)

    try:
        client = _build_client(_load_credentials())
        try:
            totals = {
                metric: _first_metric(
                    client.run_report(_report_request(property_id, date_range, metrics=[Metric(name=metric)]), timeout=timeout)
                )
                for metric in TOTAL_METRICS
            }
            top = client.run_report(
                _report_request(
                    property_id,
                    date_range,
                    dimensions=[Dimension(name="pagePath")],
                    metrics=[Metric(name="screenPageViews")],
                    order_bys=[OrderBy(metric=OrderBy.MetricOrderBy(metric_name="screenPageViews"), desc=True)],
                    limit=TOP_PAGES_LIMIT,
                ),
                timeout=timeout,
            )
        # Token refresh happens lazily inside run_report, so auth errors land here too.
        except (GoogleAPIError, GoogleAuthError) as exc:
            raise AnalyticsError(GA_API_ERROR, f"Failed to fetch GA data: {exc}") from exc
    except AnalyticsError as exc:
        logger.warning("ga_summary_failed code=%s message=%s", exc.code, exc.message)
        return exc.as_dict()

    top_pages = [
        {
            "pagePath": (row.dimension_values[0].value if row.dimension_values else "") or "N/A",
            "screenPageViews": (row.metric_values[0].value if row.metric_values else "") or "0",
        }
        for row in top.rows
    ]
    return {**totals, "topPages": top_pages}
