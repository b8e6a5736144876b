"""
Monarch GraphQL client.

Issues the transactions summary query against Monarch's GraphQL API.
https://api.monarch.com/graphql

Stateless: the caller's token is bound to a client that lives for exactly
one request, so concurrent requests never share credentials.
"""

import logging
import math
from typing import Any, Dict, Optional

import requests

from .errors import UpstreamGraphQLError, UpstreamHTTPError, UpstreamResponseError

logger = logging.getLogger(__name__)

GRAPHQL_URL = "https://api.monarch.com/graphql"

TRANSACTIONS_SUMMARY_QUERY = """
query Web_GetTransactionsPage($filters: TransactionFilterInput) {
  aggregates(filters: $filters) {
    summary {
      ...TransactionsSummaryFields
      __typename
    }
    __typename
  }
}

fragment TransactionsSummaryFields on TransactionsSummary {
  avg
  count
  max
  maxExpense
  sum
  sumIncome
  sumExpense
  first
  last
  __typename
}
"""


def _reject_constant(name: str) -> float:
    raise ValueError(f"{name} is not valid JSON")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


class MonarchGraphQLClient:
    """
    Client for a single authenticated conversation with Monarch's GraphQL API.

    Usage:
        with MonarchGraphQLClient(token) as client:
            result = client.request(TRANSACTIONS_SUMMARY_QUERY, {"filters": {...}})
    """

    def __init__(
        self,
        token: str,
        url: str = GRAPHQL_URL,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            token: Monarch API token, sent as ``Authorization: Token <token>``
            url: GraphQL endpoint
            timeout: Seconds to wait for the upstream (None = no limit)
        """
        self.url = url
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Token {token}",
            "Content-Type": "application/json",
            "Client-Platform": "web",
        })

    def __enter__(self) -> "MonarchGraphQLClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def request(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        POST a GraphQL document and return the decoded response envelope.

        Raises:
            requests.RequestException: transport failure (DNS, connect, timeout)
            UpstreamHTTPError: non-2xx status
            UpstreamResponseError: body is not a JSON object
            UpstreamGraphQLError: response carries GraphQL ``errors``
        """
        payload = {"query": query, "variables": variables or {}}
        resp = self.session.post(self.url, json=payload, timeout=self.timeout)

        if not resp.ok:
            raise UpstreamHTTPError(resp.status_code, resp.text)

        try:
            data = resp.json(parse_constant=_reject_constant, parse_float=_parse_finite_float)
        except (ValueError, RecursionError) as e:
            raise UpstreamResponseError(f"Upstream returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamResponseError(
                f"Upstream returned {type(data).__name__}, expected a JSON object"
            )

        if data.get("errors"):
            raise UpstreamGraphQLError(data["errors"])

        return data


def get_transactions_summary(
    token: str,
    filters: Dict[str, Any],
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Fetch the transactions aggregate summary for the given filters.

    Args:
        token: Caller's Monarch API token
        filters: TransactionFilterInput, forwarded verbatim
        timeout: Seconds to wait for the upstream (None = no limit)

    Returns:
        The upstream JSON response, e.g. ``{"data": {"aggregates": {...}}}``
    """
    with MonarchGraphQLClient(token, timeout=timeout) as client:
        logger.debug(f"POST {client.url} Web_GetTransactionsPage")
        return client.request(TRANSACTIONS_SUMMARY_QUERY, {"filters": filters})
