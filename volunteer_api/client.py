"""Volunteer Event API client.

This module defines a small client wrapper around the REST API served
by :mod:`volunteer_api.app`.  It uses the ``requests`` library and
exposes one method per endpoint:

* :meth:`register_user`, :meth:`login`, :meth:`get_user` – accounts.
* :meth:`list_events`, :meth:`get_event`, :meth:`search_events`,
  :meth:`list_organizer_events`, :meth:`create_event` – events.
* :meth:`register_participation`, :meth:`list_user_participations` –
  volunteering.
* :meth:`list_articles`, :meth:`list_featured_articles`,
  :meth:`get_article`, :meth:`search_articles`,
  :meth:`list_articles_by_category` – articles.
* :meth:`health` – liveness check.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is ``None`` and ``error`` is a
dictionary with the keys ``status_code``, ``message`` and ``code``
(the machine readable error code sent by the API, when available).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class VolunteerAPI:
    """Client for the volunteer event API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Server root, e.g. ``http://localhost:3000``.  The
                ``/api`` prefix is added by the client.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET`` or ``POST``).
            path: Path below ``/api`` (e.g. ``/events``).
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)`` as described in the module
            docstring.
        """
        url = f"{self.base_url}/api{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            code = None
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("error") or err_json.get("detail") or str(err_json)
                    code = err_json.get("code")
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message, "code": code}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc), "code": None}

    @staticmethod
    def _segment(value: str) -> str:
        return quote(str(value), safe="")

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    def register_user(
        self,
        email: str,
        password_hash: str,
        user_type: str,
        **profile: Any,
    ) -> Result:
        """Register a volunteer or organization.

        ``profile`` may contain ``fullName``, ``nik``,
        ``organizationName``, ``npwp`` and ``phoneNumber``.
        """
        body = {"email": email, "passwordHash": password_hash, "userType": user_type}
        body.update({k: v for k, v in profile.items() if v is not None})
        return self._request("POST", "/users/register", json_body=body)

    def login(self, email: str, password_hash: str) -> Result:
        return self._request(
            "POST", "/users/login", json_body={"email": email, "passwordHash": password_hash}
        )

    def get_user(self, user_id: str) -> Result:
        return self._request("GET", f"/users/{self._segment(user_id)}")

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def list_events(self) -> Result:
        return self._request("GET", "/events")

    def get_event(self, event_id: str) -> Result:
        return self._request("GET", f"/events/{self._segment(event_id)}")

    def search_events(self, title: str) -> Result:
        return self._request("GET", "/events/search", params={"title": title})

    def list_organizer_events(self, organizer_id: str) -> Result:
        return self._request("GET", f"/events/organizer/{self._segment(organizer_id)}")

    def create_event(self, event: Dict[str, Any]) -> Result:
        """Create an event from a camelCase payload (see ``EventCreate``)."""
        return self._request("POST", "/events", json_body=event)

    # ------------------------------------------------------------------
    # Participation
    # ------------------------------------------------------------------
    def register_participation(
        self, user_id: str, event_id: str, donation_amount: float | None = None
    ) -> Result:
        body: Dict[str, Any] = {"userId": user_id, "eventId": event_id}
        if donation_amount is not None:
            body["donationAmount"] = donation_amount
        return self._request("POST", "/participation", json_body=body)

    def list_user_participations(self, user_id: str) -> Result:
        return self._request("GET", f"/participation/user/{self._segment(user_id)}")

    # ------------------------------------------------------------------
    # Articles
    # ------------------------------------------------------------------
    def list_articles(self) -> Result:
        return self._request("GET", "/articles")

    def list_featured_articles(self) -> Result:
        return self._request("GET", "/articles/featured")

    def get_article(self, article_id: str) -> Result:
        return self._request("GET", f"/articles/{self._segment(article_id)}")

    def search_articles(self, title: str) -> Result:
        return self._request("GET", "/articles/search", params={"title": title})

    def list_articles_by_category(self, category: str) -> Result:
        return self._request("GET", f"/articles/category/{self._segment(category)}")

    def health(self) -> Result:
        return self._request("GET", "/health")


__all__: List[str] = ["VolunteerAPI"]
