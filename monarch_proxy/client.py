"""
Example client for the Monarch transactions proxy.

Demonstrates how to call the proxy from a dashboard, bot, or other
application.
"""

import requests
from typing import Any, Dict, Optional


class TransactionsProxyClient:
    """
    Client for the Monarch transactions proxy.

    Usage:
        client = TransactionsProxyClient("http://localhost:3000", api_key="proxy-secret")
        summary = client.get_transactions_summary({"startDate": "2024-01-01"}, token="monarch-token")
    """

    def __init__(self, api_url: str = "http://localhost:3000", api_key: str = "", timeout: Optional[float] = 30.0):
        """
        Initialize API client.

        Args:
            api_url: Base URL of the proxy server
            api_key: Proxy secret, sent as x-api-key
            timeout: Seconds to wait for the proxy
        """
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers["x-api-key"] = api_key

    def _post(self, endpoint: str, payload: Dict, headers: Optional[Dict] = None) -> Dict:
        """Make POST request to the proxy."""
        url = f"{self.api_url}{endpoint}"
        response = self.session.post(url, json=payload, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_transactions_summary(self, filters: Dict[str, Any], token: str) -> Dict:
        """
        Get the aggregate transactions summary.

        Args:
            filters: TransactionFilterInput (e.g. {"startDate": "2024-01-01"})
            token: Monarch API token; passed per call, never stored

        Returns:
            Monarch GraphQL response ({"data": {"aggregates": {"summary": {...}}}})
        """
        return self._post(
            "/get-transactions",
            {"filters": filters},
            headers={"Authorization": f"Token {token}"},
        )

    def close(self) -> None:
        self.session.close()


if __name__ == "__main__":
    import os

    client = TransactionsProxyClient(
        os.getenv("PROXY_URL", "http://localhost:3000"),
        api_key=os.getenv("PROXY_API_KEY", ""),
    )
    summary = client.get_transactions_summary(
        {"startDate": "2024-01-01", "endDate": "2024-12-31"},
        token=os.getenv("MONARCH_TOKEN", ""),
    )
    print(summary["data"]["aggregates"]["summary"])
