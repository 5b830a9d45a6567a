"""YAML load/dump of front-matter attributes with position-aware errors."""

from __future__ import annotations

import io
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap, CommentedSeq
from ruamel.yaml.constructor import ConstructorError, RoundTripConstructor
from ruamel.yaml.emitter import RoundTripEmitter
from ruamel.yaml.error import MarkedYAMLError, YAMLError

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 1_000_000  # characters in the block body
_DUMP_WIDTH = 4096  # never fold long scalars onto continuation lines


class FrontMatterParseError(Exception):
    """Raised when the block body is not a YAML mapping.

    ``line`` and ``column`` are 0-based positions inside the block body, taken
    from the parser's problem mark when one is available.
    """

    def __init__(
        self, message: str, line: int | None = None, column: int | None = None
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        super().__init__(message)


class FrontMatterSafetyError(FrontMatterParseError):
    """Raised when the block body exceeds the configured size limit."""


# ---------------------------------------------------------------------------
# ruamel.yaml customizations
# ---------------------------------------------------------------------------


class _FrontMatterConstructor(RoundTripConstructor):
    """Round-trip constructor for front-matter bodies.

    A repeated mapping key overwrites the earlier value, and an impossible
    timestamp (such as ``2021-02-30``) is a positioned construction error.
    """

    def check_mapping_key(
        self, node: Any, key_node: Any, mapping: Any, key: Any, value: Any
    ) -> bool:
        if key in mapping:
            mapping[key] = value
            return False
        return True

    def construct_yaml_timestamp(self, node: Any, values: Any = None) -> Any:
        try:
            return super().construct_yaml_timestamp(node, values)
        except ValueError as exc:
            raise ConstructorError(
                None, None, f"invalid timestamp {node.value!r}: {exc}", node.start_mark
            ) from exc


_FrontMatterConstructor.add_default_constructor("timestamp")


class _CanonicalEmitter(RoundTripEmitter):
    """Emitter that indents a block sequence nested in a sequence by one mapping step.

    The stock emitter steps such sequences by the full sequence indent, which
    leaves a four-column jump and a padded ``-   -`` line.
    """

    def increase_indent(
        self, flow: bool = False, sequence: bool | None = None, indentless: bool = False
    ) -> None:
        super().increase_indent(flow, sequence, indentless)
        if not flow and not indentless and self.indents.seq_seq():
            self.indent -= self.best_sequence_indent - self.best_map_indent


class AttributeParser:
    """Turns a front-matter body into an ordered mapping and back.

    Uses ruamel.yaml in round-trip mode so key order survives the trip and
    parse errors carry line/column marks.
    """

    def __init__(self, max_document_size: int = _MAX_DOCUMENT_SIZE) -> None:
        self._max_document_size = max_document_size
        self._yaml = YAML()
        self._yaml.Constructor = _FrontMatterConstructor
        self._yaml.preserve_quotes = False
        self._yaml.allow_duplicate_keys = True

        self._dumper = YAML()
        self._dumper.Emitter = _CanonicalEmitter
        self._dumper.default_flow_style = False
        self._dumper.width = _DUMP_WIDTH
        self._dumper.indent(mapping=2, sequence=4, offset=2)

    # -- loading -------------------------------------------------------------

    def load(self, body: str) -> dict[str, Any]:
        """Parse *body* and return its attributes as a plain ordered dict."""
        if len(body) > self._max_document_size:
            raise FrontMatterSafetyError(
                f"front matter exceeds maximum size "
                f"({len(body):,} chars > {self._max_document_size:,} limit)"
            )
        try:
            data = self._yaml.load(body)
        except MarkedYAMLError as exc:
            mark = exc.problem_mark or exc.context_mark
            raise FrontMatterParseError(
                exc.problem or exc.context or str(exc),
                line=mark.line if mark is not None else None,
                column=mark.column if mark is not None else None,
            ) from exc
        except YAMLError as exc:
            raise FrontMatterParseError(str(exc)) from exc
        except (ValueError, TypeError, OverflowError) as exc:
            # Scalar construction, e.g. an impossible calendar date.
            raise FrontMatterParseError(f"invalid value: {exc}") from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise FrontMatterParseError("front matter must be a mapping", line=0, column=0)
        return self._to_plain_dict(data)

    # -- dumping -------------------------------------------------------------

    def dump(self, attributes: dict[str, Any]) -> list[str]:
        """Serialize *attributes* to block-style body lines."""
        if not attributes:
            return []
        stream = io.StringIO()
        self._dumper.dump(self._to_commented(attributes), stream)
        return stream.getvalue().splitlines()

    # -- conversion helpers --------------------------------------------------

    def _to_plain_dict(self, data: Any) -> dict[str, Any]:
        """Convert ruamel.yaml CommentedMap/Seq to plain Python dict/list."""
        return {k: self._to_plain_value(v) for k, v in data.items()}

    def _to_plain_value(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: self._to_plain_value(v) for k, v in data.items()}
        if isinstance(data, list):
            return [self._to_plain_value(item) for item in data]
        return data

    def _to_commented(self, data: Any) -> Any:
        """Rebuild fresh containers so no flow style from the source survives."""
        if isinstance(data, dict):
            return CommentedMap((k, self._to_commented(v)) for k, v in data.items())
        if isinstance(data, list):
            return CommentedSeq(self._to_commented(item) for item in data)
        return data
