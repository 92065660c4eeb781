"""
Fluent assertion engine for HTTP responses.

ResponseAssertions is mixed into Response. Every ensure_* method
returns the response itself on success, so checks can be chained:

    response.ensure_200().ensure_json({"ok": True}).ensure_header("X-Id")

The first failed check raises a typed ResponseException; later checks
in the chain are not evaluated.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Iterable

from jsonpath_ng import parse as parse_jsonpath
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from ..util import (
    canonical_json,
    loose_equals,
    make_expectation_message,
    recursive_sort,
    replace_recursive,
    strict_equals,
    strip_tags,
)
from .errors import (
    ContentException,
    ContentTypeException,
    HeaderException,
    ResponseException,
    StatusCodeException,
)

if TYPE_CHECKING:
    from ..message.response import Response

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
XML_CONTENT_TYPES = ["application/xml", "text/xml"]
REDIRECT_CODES = [301, 302]
STRUCTURE_WILDCARD = "*"

_UNSET: Any = object()


class ResponseAssertions:
    """
    Validators for a response.

    Relies on the host class providing body, status_code(), header(),
    content_type() and decoded_json().
    """

    def _failure(self, exc_type: type[ResponseException], message: str) -> ResponseException:
        logger.debug(f"{exc_type.__name__}: {message}")
        return exc_type(self, message)

    def _ensure(self, success: bool, exc_type: type[ResponseException], message: str) -> Response:
        if not success:
            raise self._failure(exc_type, message)
        return self

    def _status_number(self) -> int:
        return int(self.status_code())

    def _json_body(self) -> Any:
        try:
            return self.decoded_json()
        except ValueError as e:
            raise self._failure(ContentException, f"Unparseable json in response body: {e}") from e

    # ─────────────────────────────────────────────────────────────────────
    # Status codes
    # ─────────────────────────────────────────────────────────────────────

    def ensure_status_in_range(self, min_code: int, max_code: int) -> Response:
        """Ensure that the status code is in the range [min_code...max_code]."""
        code = self._status_number()
        return self._ensure(
            min_code <= code <= max_code,
            StatusCodeException,
            f"Expected status code to be in range [{min_code}...{max_code}], "
            f"but {code} was returned",
        )

    def ensure_status_in(self, valid_codes: Iterable[int]) -> Response:
        """Ensure that the status code is one of the given codes."""
        valid_codes = [int(c) for c in valid_codes]
        code = self._status_number()
        return self._ensure(
            code in valid_codes,
            StatusCodeException,
            f"Expected status code to be one of [{', '.join(map(str, valid_codes))}], "
            f"but {code} was returned",
        )

    def ensure_status(self, valid_code: int) -> Response:
        code = self._status_number()
        return self._ensure(
            code == int(valid_code),
            StatusCodeException,
            f"Expected status code to be {valid_code}, but it was {code}",
        )

    def ensure_2xx(self) -> Response:
        return self.ensure_status_in_range(200, 299)

    def ensure_success(self) -> Response:
        return self.ensure_2xx()

    def ensure_200(self) -> Response:
        return self.ensure_status(200)

    def ensure_201(self) -> Response:
        return self.ensure_status(201)

    def ensure_204(self) -> Response:
        return self.ensure_status(204)

    def ensure_301(self) -> Response:
        return self.ensure_status(301)

    def ensure_302(self) -> Response:
        return self.ensure_status(302)

    def ensure_redirect(self, url: str | None = None) -> Response:
        """
        Ensure the response redirects, optionally to a given URL.

        The status must be 301 or 302 and a Location header must be
        present. If url is given, Location must equal it exactly.
        """
        return self.ensure_status_in(REDIRECT_CODES).ensure_header("Location", url)

    # ─────────────────────────────────────────────────────────────────────
    # Headers
    # ─────────────────────────────────────────────────────────────────────

    def ensure_header(self, name: str, expected: str | None = None) -> Response:
        """Ensure a header is present and, if expected is given, has exactly that value."""
        value = self.header(name)

        if value is None:
            raise self._failure(HeaderException, f"Header {name} is missing")

        return self._ensure(
            expected is None or value == expected,
            HeaderException,
            f"Header {name} was expected to have the value {expected}, "
            f"but it has the value {value}",
        )

    def ensure_content_type(self, content_type: str | Iterable[str]) -> Response:
        """Ensure the Content-Type header is the given type or one of the given types."""
        if isinstance(content_type, str):
            content_type = [content_type]
        accepted = list(content_type)
        actual = self.content_type()

        return self._ensure(
            actual in accepted,
            ContentTypeException,
            f"Expected response content type to be [{'|'.join(accepted)}], "
            f"but it was {actual if actual is not None else 'missing'}",
        )

    def ensure_xml(self) -> Response:
        return self.ensure_content_type(XML_CONTENT_TYPES)

    # ─────────────────────────────────────────────────────────────────────
    # Body text
    # ─────────────────────────────────────────────────────────────────────

    def ensure_contains(self, value: str) -> Response:
        return self._ensure(
            value in self.body,
            ContentException,
            f"Response body was expected to contain {value}, but it does not",
        )

    def ensure_dont_see(self, value: str) -> Response:
        return self._ensure(
            value not in self.body,
            ContentException,
            f"Response body was not expected to contain {value}, but it does",
        )

    def ensure_see_text(self, value: str) -> Response:
        """Like ensure_contains, but markup tags are stripped from the body first."""
        return self._ensure(
            value in strip_tags(self.body),
            ContentException,
            f"The response text was expected to contain {value}, but it does not",
        )

    def ensure_dont_see_text(self, value: str) -> Response:
        return self._ensure(
            value not in strip_tags(self.body),
            ContentException,
            f"The response text was not expected to contain {value}, but it does",
        )

    # ─────────────────────────────────────────────────────────────────────
    # JSON
    # ─────────────────────────────────────────────────────────────────────

    def ensure_json(self, data: Any = None, strict: bool = True) -> Response:
        """
        Ensure the response is JSON and, optionally, contains a data subset.

        The subset check merges data onto the decoded body. If the merge
        changes nothing, every value in data was already present at the
        same path.

        Args:
            data: Expected subset (dict or list). Empty means "just JSON".
            strict: Compare without type coercion ("1" != 1). With
                strict=False scalars are compared with loose_equals.

        Raises:
            ContentTypeException: If Content-Type is not application/json
            ContentException: If the body is not a JSON object/array or
                does not contain the subset
        """
        self.ensure_content_type(JSON_CONTENT_TYPE)

        if not data:
            return self

        body = recursive_sort(self._json_body())
        if not isinstance(body, (dict, list)):
            raise self._failure(ContentException, "Unparseable json in response body")

        expected = recursive_sort(json.loads(json.dumps(data)))
        replaced = replace_recursive(body, expected)

        matches = strict_equals(replaced, body) if strict else loose_equals(replaced, body)

        return self._ensure(
            matches,
            ContentException,
            make_expectation_message("Could not find data subset in response", expected, body),
        )

    def ensure_exact_json(self, data: Any) -> Response:
        """Ensure the body is exactly the given JSON value, ignoring key order."""
        body = recursive_sort(self._json_body())
        expected = recursive_sort(data)

        return self._ensure(
            canonical_json(body) == canonical_json(expected),
            ContentException,
            make_expectation_message(
                "Response body does not match the expected json", expected, body
            ),
        )

    def ensure_json_fragment(self, data: dict[str, Any]) -> Response:
        """
        Ensure every top-level key/value pair of data appears in the body.

        Each pair is serialized canonically and looked up as a substring
        of the canonical body, so it may sit at any nesting level.
        """
        actual = canonical_json(self._json_body())

        for fragment in self._fragments(data):
            if fragment not in actual:
                raise self._failure(
                    ContentException,
                    make_expectation_message("Unable to find json fragment", fragment, actual),
                )

        return self

    def ensure_json_missing(self, data: dict[str, Any]) -> Response:
        """Ensure no top-level key/value pair of data appears anywhere in the body."""
        actual = canonical_json(self._json_body())

        for fragment in self._fragments(data):
            if fragment in actual:
                raise self._failure(
                    ContentException,
                    make_expectation_message("Found unexpected json fragment", fragment, actual),
                )

        return self

    def _fragments(self, data: dict[str, Any]) -> list[str]:
        if not isinstance(data, dict):
            raise TypeError(f"Json fragments must be given as a dict, not {type(data).__name__}")
        # '{"key":value}' without the outer braces
        return [canonical_json({key: value})[1:-1] for key, value in recursive_sort(data).items()]

    def ensure_json_structure(self, structure: Any = None, data: Any = None) -> Response:
        """
        Ensure the JSON body has a given shape.

        A structure is a dict or a list:
            - {"key": nested}: data must have "key"; nested is checked against data["key"]
            - {"key": None}: data must have "key" (the value is not checked)
            - {"*": nested}: data must be a list; every element is checked against nested
            - ["a", "b", {...}]: data must have keys "a" and "b"; dicts are checked
              against the same data

        Example:
            response.ensure_json_structure({
                "data": {"*": ["id", "name"]},
                "meta": ["total"],
            })

        Args:
            structure: Expected shape. None only checks that the body is JSON.
            data: Data to validate. Defaults to the decoded body.
        """
        if structure is None:
            return self.ensure_json(self._json_body())

        if data is None:
            data = self._json_body()

        self._check_structure(structure, data, "")
        return self

    def _check_structure(self, structure: Any, data: Any, path: str) -> None:
        if isinstance(structure, list):
            for item in structure:
                if isinstance(item, (dict, list)):
                    self._check_structure(item, data, path)
                else:
                    self._require_key(data, item, path)
            return

        if not isinstance(structure, dict):
            self._require_key(data, structure, path)
            return

        for key, nested in structure.items():
            if key == STRUCTURE_WILDCARD and isinstance(nested, (dict, list)):
                if not isinstance(data, list):
                    raise self._failure(
                        ContentException,
                        f'Expected data at "{path or "$"}" to be an array, '
                        f"but it is {type(data).__name__}",
                    )
                for index, entry in enumerate(data):
                    self._check_structure(nested, entry, f"{path}[{index}]")
                continue

            self._require_key(data, key, path)

            if isinstance(nested, (dict, list)):
                self._check_structure(nested, data[key], _join_path(path, key))

    def _require_key(self, data: Any, key: Any, path: str) -> None:
        if isinstance(data, dict) and key in data:
            return
        location = f' at "{path}"' if path else ""
        raise self._failure(ContentException, f'Expected data to have key "{key}"{location}')

    def ensure_json_path(self, path: str, expected: Any = _UNSET) -> Response:
        """
        Ensure a JSONPath expression matches the body.

        If expected is given, the first match must equal it (strictly).

        Raises:
            ValueError: If path is not a valid JSONPath expression
            ContentException: If nothing matches or the value differs
        """
        try:
            expression = parse_jsonpath(path)
        except (JsonPathLexerError, JsonPathParserError) as e:
            raise ValueError(f"Invalid JSONPath expression {path!r}: {e}") from e

        matches = expression.find(self._json_body())
        if not matches:
            raise self._failure(
                ContentException,
                f"Expected json path {path} to exist, but no matches were found",
            )

        if expected is _UNSET:
            return self

        actual = recursive_sort(matches[0].value)
        wanted = recursive_sort(json.loads(json.dumps(expected)))

        return self._ensure(
            strict_equals(actual, wanted),
            ContentException,
            make_expectation_message(f"Unexpected value at json path {path}", wanted, actual),
        )


def _join_path(path: str, key: Any) -> str:
    return f"{path}.{key}" if path else str(key)
