import requests


class APIError(Exception):
    """HTTP error returned by a hosting API. Keeps the status code for classification."""

    def __init__(self, status_code: int, message: str, response: requests.Response | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.response = response


def raise_for_api_error(r: requests.Response, service: str) -> None:
    if r.status_code < 400:
        return
    try:
        body = r.json()
    except ValueError:
        body = r.text
    raise APIError(
        r.status_code,
        f"{service} API error status={r.status_code} body={str(body)[:300]}",
        response=r,
    )
