"""Pydantic configuration models for the check."""

import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field, PrivateAttr, field_validator, model_validator

from ..engine.formatter import FieldSelection
from ..engine.numbers import coerce_number
from ..engine.paths import WILDCARD, parse_path_list
from ..engine.thresholds import parse_range
from ..utils.errors import ConfigError
from ..utils.metrics import AttributeSpec

DEFAULT_TIMEOUT = 15
DEFAULT_CONTENT_TYPE = "application/xml"
ANY_MEDIA_TYPE = "*/*"

_MEDIA_TYPE_RE = re.compile(r'^[\w.+-]+/[\w.+-]+$')


class CheckConfig(BaseModel):
    """Options of a single check, as given by the operator."""

    url: str
    attributes: str
    warning: Optional[str] = None
    critical: Optional[str] = None
    divisor: Optional[str] = None
    perfvars: Optional[str] = None
    outputvars: Optional[str] = None
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)
    metadata: Optional[str] = None
    contenttype: str = DEFAULT_CONTENT_TYPE
    ignoressl: bool = False

    _specs: List[AttributeSpec] = PrivateAttr(default_factory=list)

    @field_validator(
        'attributes', 'warning', 'critical', 'divisor', 'perfvars', 'outputvars',
        mode='before'
    )
    @classmethod
    def join_lists(cls, v: Any) -> Any:
        """Accept YAML lists and bare numbers for comma-separated options."""
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v)
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('url')
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Validate URL format."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('URL must start with http:// or https://')
        return v

    @field_validator('contenttype')
    @classmethod
    def validate_contenttype(cls, v: str) -> str:
        """The expected content type is matched as a regular expression."""
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f'Invalid content type pattern: {e}')
        return v

    @field_validator('perfvars', 'outputvars')
    @classmethod
    def validate_fields(cls, v: Optional[str]) -> Optional[str]:
        """Field lists are either the wildcard or valid paths."""
        if v is None or v.strip() == WILDCARD:
            return v
        try:
            parse_path_list(v)
        except ConfigError as e:
            raise ValueError(str(e))
        return v

    @model_validator(mode='after')
    def build_attribute_specs(self) -> 'CheckConfig':
        """Pair attributes with thresholds and divisors positionally."""
        try:
            paths = parse_path_list(self.attributes)
            warnings = self._split_paired('warning', self.warning, len(paths))
            criticals = self._split_paired('critical', self.critical, len(paths))
            divisors = self._split_paired('divisor', self.divisor, len(paths))

            seen = set()
            specs = []
            for i, path in enumerate(paths):
                if path in seen:
                    raise ConfigError(f"Attribute {path} is configured more than once")
                seen.add(path)
                specs.append(AttributeSpec(
                    path=path,
                    warning=parse_range(warnings[i]) if warnings else None,
                    critical=parse_range(criticals[i]) if criticals else None,
                    divisor=self._parse_divisor(divisors[i]) if divisors else 1,
                ))
        except ConfigError as e:
            raise ValueError(str(e))

        self._specs = specs
        return self

    @staticmethod
    def _split_paired(name: str, value: Optional[str], count: int) -> Optional[List[str]]:
        if value is None:
            return None
        items = value.split(',')
        if len(items) != count:
            raise ConfigError(
                f"Got {len(items)} {name} value(s) for {count} attribute(s)"
            )
        return items

    @staticmethod
    def _parse_divisor(text: str) -> float:
        divisor = coerce_number(text)
        if divisor is None:
            raise ConfigError(f"Divisor must be a number: {text!r}")
        if divisor == 0:
            raise ConfigError("Divisor must not be zero")
        return divisor

    def attribute_specs(self) -> List[AttributeSpec]:
        """Attributes in configured order."""
        return list(self._specs)

    def perf_fields(self) -> FieldSelection:
        """
        Fields reported in message and perfdata.

        Defaults to the configured attributes when perfvars is not set.
        """
        if self.perfvars is None:
            return [spec.path for spec in self._specs]
        return self._field_selection(self.perfvars)

    def accept_header(self) -> str:
        """
        Value for the Accept request header.

        contenttype is a pattern; it is only sent when it spells a plain
        media type such as ``application/xml``.
        """
        media_type = self.contenttype.strip()
        if _MEDIA_TYPE_RE.match(media_type):
            return media_type
        return ANY_MEDIA_TYPE

    def output_fields(self) -> FieldSelection:
        """Fields reported in the message only."""
        if self.outputvars is None:
            return None
        return self._field_selection(self.outputvars)

    @staticmethod
    def _field_selection(value: str) -> FieldSelection:
        if value.strip() == WILDCARD:
            return WILDCARD
        return parse_path_list(value)
