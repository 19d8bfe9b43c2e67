"""Application configuration loaded from environment variables."""

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class AppConfig:
    """Centralized application configuration.

    Required fields have no defaults and will cause a KeyError at startup
    if the corresponding environment variable is missing. Service constants
    have sensible defaults but can be overridden via environment variables.
    """

    # Required — no defaults, fail at startup if missing
    client_id: str
    client_secret: str
    tenant_id: str
    account_name: str
    share_name: str

    # Service constants — defaults provided, overridable via env
    endpoint_suffix: str = "file.core.windows.net"
    api_version: str = "2022-11-02"
    page_size: int | None = None
    request_timeout: float = 30.0


def load_config() -> AppConfig:
    """Construct an AppConfig from environment variables.

    Required environment variables:
        SL_CLIENT_ID: Azure AD application (client) ID.
        SL_CLIENT_SECRET: Azure AD application client secret.
        SL_TENANT_ID: Azure AD tenant ID.
        SL_ACCOUNT_NAME: Storage account that owns the file share.
        SL_SHARE_NAME: Name of the file share to list.

    Optional environment variables (with defaults):
        SL_ENDPOINT_SUFFIX: File service host suffix (default: file.core.windows.net).
        SL_API_VERSION: Value sent as x-ms-version (default: 2022-11-02).
        SL_PAGE_SIZE: maxresults requested per page (default: unset, service decides).
        SL_REQUEST_TIMEOUT: Per-request timeout in seconds (default: 30).

    Returns:
        Configured AppConfig instance.
    """
    page_size = os.environ.get("SL_PAGE_SIZE")
    return AppConfig(
        client_id=os.environ["SL_CLIENT_ID"],
        client_secret=os.environ["SL_CLIENT_SECRET"],
        tenant_id=os.environ["SL_TENANT_ID"],
        account_name=os.environ["SL_ACCOUNT_NAME"],
        share_name=os.environ["SL_SHARE_NAME"],
        endpoint_suffix=os.environ.get("SL_ENDPOINT_SUFFIX", "file.core.windows.net"),
        api_version=os.environ.get("SL_API_VERSION", "2022-11-02"),
        page_size=int(page_size) if page_size else None,
        request_timeout=float(os.environ.get("SL_REQUEST_TIMEOUT", "30")),
    )
