"""ResponseDocument: an already-fetched response body."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .exceptions import MalformedResponseError


@dataclass(frozen=True)
class ResponseDocument:
    """Body of one response as delivered by the transport.

    Processors read it through ``value`` (scalar text) or ``xml()``
    (element tree); both raise :class:`MalformedResponseError` rather
    than leaking parser exceptions.
    """

    body: str
    status_code: int = 200
    headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def coerce(cls, document: ResponseDocument | str | bytes) -> ResponseDocument:
        if isinstance(document, ResponseDocument):
            return document
        if isinstance(document, bytes):
            try:
                return cls(body=document.decode("utf-8"))
            except UnicodeDecodeError as e:
                raise MalformedResponseError(repr(document), "UTF-8 text") from e
        return cls(body=document)

    def xml(self, expected: str = "an XML document") -> ET.Element:
        try:
            return ET.fromstring(self.body)
        except ET.ParseError as e:
            raise MalformedResponseError(self.body, expected) from e

    @property
    def value(self) -> str:
        """Scalar text of the body.

        A single-element XML envelope such as ``<friends>true</friends>``
        is unwrapped to its text.
        """
        text = self.body.strip()
        if text.startswith("<"):
            root = self.xml("a scalar value")
            if len(root):
                raise MalformedResponseError(self.body, "a scalar value")
            return (root.text or "").strip()
        return text
