"""Azure Files REST client with MSAL authentication."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from email.utils import formatdate
from typing import TYPE_CHECKING, Any
from urllib import request as urllib_request
from urllib.error import HTTPError
from urllib.parse import quote, urlencode

import msal

if TYPE_CHECKING:
    from share_lister.config import AppConfig

logger = logging.getLogger(__name__)

STORAGE_SCOPES = ["https://storage.azure.com/.default"]
AUTHORITY_BASE_URL = "https://login.microsoftonline.com"
DEFAULT_ENDPOINT_SUFFIX = "file.core.windows.net"
DEFAULT_API_VERSION = "2022-11-02"

# Token-based access to Azure Files requires a declared request intent.
FILE_REQUEST_INTENT = "backup"


class FileAuthError(Exception):
    """Raised when MSAL token acquisition fails."""


class FileApiError(Exception):
    """Raised when the file service returns an unexpected non-2xx response."""

    def __init__(self, status_code: int, message: str, code: str = "") -> None:
        label = f" {code}" if code else ""
        super().__init__(f"File service error {status_code}{label}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message


@dataclass
class HttpResponse:
    """Raw HTTP response handed from the transport to the listing cursor."""

    status: int
    body: bytes = b""
    reason: str = ""
    headers: dict[str, str] = field(default_factory=dict)


class FileShareClient:
    """Authenticated client for one Azure Files share."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        tenant_id: str,
        account_name: str,
        share_name: str,
        endpoint_suffix: str = DEFAULT_ENDPOINT_SUFFIX,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 30.0,
    ) -> None:
        """Initialise the MSAL confidential client application.

        Args:
            client_id: Azure AD application (client) ID.
            client_secret: Azure AD application client secret.
            tenant_id: Azure AD tenant ID.
            account_name: Storage account name.
            share_name: File share name.
            endpoint_suffix: Host suffix of the file service endpoint.
            api_version: Storage service version sent as x-ms-version.
            timeout: Socket timeout in seconds for each request.
        """
        authority = f"{AUTHORITY_BASE_URL}/{tenant_id}"
        self._app = msal.ConfidentialClientApplication(
            client_id=client_id,
            client_credential=client_secret,
            authority=authority,
        )
        self._base_url = f"https://{account_name}.{endpoint_suffix}/{quote(share_name)}"
        self._api_version = api_version
        self._timeout = timeout

    def _acquire_token(self) -> str:
        """Acquire a Bearer token using client credentials flow.

        Returns:
            Access token string.

        Raises:
            FileAuthError: If MSAL cannot acquire a token.
        """
        result: dict[str, Any] = self._app.acquire_token_for_client(scopes=STORAGE_SCOPES) or {}
        if "access_token" not in result:
            error = result.get("error", "unknown_error")
            description = result.get("error_description", "No description provided")
            logger.error("[_acquire_token] MSAL token acquisition failed; error:%s", error)
            raise FileAuthError(f"Token acquisition failed: {error}: {description}")
        return str(result["access_token"])

    def directory_url(self, path: str, limit: int | None = None, marker: str = "") -> str:
        """Build the List Directories and Files URL for a directory path.

        Args:
            path: Share-relative directory path; surrounding slashes are ignored.
            limit: Optional maxresults value.
            marker: Continuation marker; omitted when empty.

        Returns:
            Absolute request URL.
        """
        segment = quote(path.strip("/"))
        url = f"{self._base_url}/{segment}" if segment else self._base_url
        params: dict[str, str | int] = {
            "restype": "directory",
            "comp": "list",
            "include": "Timestamps,ETag",
        }
        if marker:
            params["marker"] = marker
        if limit is not None:
            params["maxresults"] = limit
        return f"{url}?{urlencode(params, safe=',')}"

    def list_directory(
        self, path: str, limit: int | None = None, marker: str = ""
    ) -> HttpResponse:
        """Request one page of a directory listing.

        Non-2xx responses are returned rather than raised so the caller can
        tell a missing directory (404) from a real failure.

        Args:
            path: Share-relative directory path.
            limit: Optional maximum number of entries for this page.
            marker: Continuation marker from the previous page, or "".

        Returns:
            HttpResponse with the raw status and body.

        Raises:
            FileAuthError: If token acquisition fails.
        """
        token = self._acquire_token()
        url = self.directory_url(path, limit, marker)
        req = urllib_request.Request(
            url,
            headers={
                "Authorization": f"Bearer {token}",
                "x-ms-version": self._api_version,
                "x-ms-date": formatdate(usegmt=True),
                "x-ms-file-request-intent": FILE_REQUEST_INTENT,
                "Accept": "application/xml",
            },
            method="GET",
        )
        logger.debug("[list_directory] requesting page; path:%s;marker:%s", path, marker)
        try:
            with urllib_request.urlopen(req, timeout=self._timeout) as resp:
                return HttpResponse(
                    status=resp.status,
                    body=resp.read(),
                    reason=resp.reason,
                    headers={k.lower(): v for k, v in resp.headers.items()},
                )
        except HTTPError as exc:
            return HttpResponse(
                status=exc.code,
                body=exc.read(),
                reason=str(exc.reason),
                headers={k.lower(): v for k, v in exc.headers.items()} if exc.headers else {},
            )


def parse_error(response: HttpResponse) -> FileApiError:
    """Build a FileApiError from a failed file service response.

    The service reports failures as ``<Error><Code/><Message/></Error>``;
    bodies that are not in that shape fall back to the HTTP reason.

    Args:
        response: The non-success response.

    Returns:
        FileApiError carrying the status, service error code and message.
    """
    code = response.headers.get("x-ms-error-code", "")
    message = response.reason or "Unknown error"
    text = response.body.decode("utf-8", errors="replace").lstrip("\ufeff").strip()
    try:
        root = ET.fromstring(text)
    except ET.ParseError:
        root = None
    if root is not None and root.tag == "Error":
        code = root.findtext("Code") or code
        message = (root.findtext("Message") or message).strip()
    return FileApiError(response.status, message, code)


def file_share_client_from_config(config: AppConfig) -> FileShareClient:
    """Construct a FileShareClient from application configuration.

    Args:
        config: Application configuration instance.

    Returns:
        Configured FileShareClient instance.
    """
    return FileShareClient(
        client_id=config.client_id,
        client_secret=config.client_secret,
        tenant_id=config.tenant_id,
        account_name=config.account_name,
        share_name=config.share_name,
        endpoint_suffix=config.endpoint_suffix,
        api_version=config.api_version,
        timeout=config.request_timeout,
    )
