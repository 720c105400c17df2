"""
Licensed to the Apache Software Foundation (ASF) under one
or more contributor license agreements.  See the NOTICE file
distributed with this work for additional information
regarding copyright ownership.  The ASF licenses this file
to you under the Apache License, Version 2.0 (the
"License"); you may not use this file except in compliance
with the License.  You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import logging
import urllib.parse
from typing import Dict, Optional, Type, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3 import Retry

from pyhivecatalog.common.json_util import JSON
from pyhivecatalog.metastore.metastore_client import (AlreadyExistsException,
                                                      InvalidOperationException,
                                                      NoSuchObjectException)
from pyhivecatalog.metastore.rest.api_response import ErrorResponse
from pyhivecatalog.metastore.rest.rest_exception import RESTException

T = TypeVar('T')

# status codes the service uses for the errors callers act on
_METASTORE_ERRORS = {
    400: InvalidOperationException,
    404: NoSuchObjectException,
    409: AlreadyExistsException,
}


class ExponentialRetry:

    adapter: HTTPAdapter

    def __init__(self, max_retries: int = 5):
        retry = self.__create_retry_strategy(max_retries)
        self.adapter = HTTPAdapter(max_retries=retry)

    @staticmethod
    def __create_retry_strategy(max_retries: int) -> Retry:
        # POST is left out, creates and alters are not idempotent
        return Retry(
            total=max_retries,
            read=max_retries,
            connect=max_retries,
            backoff_factor=1,
            status_forcelist=[429, 502, 503, 504],
            raise_on_status=False,
            raise_on_redirect=False,
            allowed_methods=["GET", "HEAD", "PUT", "DELETE"],
        )


class LoggingInterceptor:
    REQUEST_ID_KEY = "x-request-id"
    DEFAULT_REQUEST_ID = "unknown"

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def request_id(self, headers) -> str:
        return headers.get(self.REQUEST_ID_KEY, self.DEFAULT_REQUEST_ID)

    def log_request(self, method: str, url: str, headers) -> None:
        self.logger.debug("Request [%s]: %s %s", self.request_id(headers), method, url)

    def log_response(self, status_code: int, headers) -> None:
        self.logger.debug("Response [%s]: %s", self.request_id(headers), status_code)


def _normalize_uri(uri: str) -> str:
    if not uri or not uri.strip():
        raise ValueError("Metastore uri must not be empty")
    server_uri = uri.strip().rstrip("/")
    if not server_uri.startswith(("http://", "https://")):
        server_uri = f"http://{server_uri}"
    return server_uri


def _parse_error(body: Optional[str], status_code: int) -> ErrorResponse:
    if body:
        try:
            error = JSON.from_json(body, ErrorResponse)
        except (ValueError, TypeError, AttributeError):
            error = None
        if error is not None and error.message is not None:
            return error
    return ErrorResponse(message=body or "empty response body", code=status_code)


def _raise_for_error(error: ErrorResponse, status_code: int, request_id: str):
    """Raises the metastore error a failed response stands for."""
    message = error.message
    if request_id != LoggingInterceptor.DEFAULT_REQUEST_ID:
        message = f"{message} requestId:{request_id}"
    exception = _METASTORE_ERRORS.get(status_code)
    if exception is not None:
        raise exception(message)
    raise RESTException(f"Metastore service failed with status {status_code}: {message}", status_code)


class HttpClient:
    """JSON over HTTP calls to the metastore service, with retries of idempotent requests."""

    def __init__(self, uri: str, headers: Optional[Dict[str, str]] = None, max_retries: int = 0,
                 timeout: int = 180):
        self.uri = _normalize_uri(uri)
        self.logging_interceptor = LoggingInterceptor()
        self.timeout = (timeout, timeout)

        self.session = requests.Session()
        retry_interceptor = ExponentialRetry(max_retries=max_retries)
        self.session.mount("http://", retry_interceptor.adapter)
        self.session.mount("https://", retry_interceptor.adapter)
        self.session.headers.update({
            'Accept': 'application/json',
            'Content-Type': 'application/json',
        })
        if headers:
            self.session.headers.update(headers)

    def get(self, path: str, response_type: Type[T]) -> T:
        return self.get_with_params(path, None, response_type)

    def get_with_params(self, path: str, query_params: Optional[Dict[str, str]], response_type: Type[T]) -> T:
        return self._execute_request("GET", self._get_request_url(path, query_params), response_type=response_type)

    def post(self, path: str, body) -> None:
        try:
            data = JSON.to_json(body)
        except (TypeError, ValueError) as e:
            raise RESTException("Cannot serialize request body for {}".format(path)) from e
        self._execute_request("POST", self._get_request_url(path, None), data=data)

    def delete(self, path: str) -> None:
        self.delete_with_params(path, None)

    def delete_with_params(self, path: str, query_params: Optional[Dict[str, str]]) -> None:
        self._execute_request("DELETE", self._get_request_url(path, query_params))

    def _get_request_url(self, path: str, query_params: Optional[Dict[str, str]]) -> str:
        url = self.uri + path
        if query_params:
            url = f"{url}?{urllib.parse.urlencode(query_params)}"
        return url

    def close(self):
        self.session.close()

    def _execute_request(self, method: str, url: str, data: Optional[str] = None,
                         response_type: Optional[Type[T]] = None) -> Optional[T]:
        self.logging_interceptor.log_request(method, url, self.session.headers)
        try:
            response = self.session.request(method=method, url=url,
                                            data=data.encode('utf-8') if data else None,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            raise RESTException("{} {} failed: {}".format(method, url, e)) from e
        self.logging_interceptor.log_response(response.status_code, response.headers)

        body = response.text or None
        if not response.ok:
            _raise_for_error(_parse_error(body, response.status_code), response.status_code,
                            self.logging_interceptor.request_id(response.headers))
        if response_type is None:
            return None
        if body is None:
            raise RESTException("{} {} returned no body".format(method, url), response.status_code)
        try:
            return JSON.from_json(body, response_type)
        except (TypeError, ValueError) as e:
            raise RESTException("{} {} returned an unreadable body".format(method, url),
                                response.status_code) from e
