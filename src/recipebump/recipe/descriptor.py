"""
Recipe descriptor loading and in-place editing.

A recipe is a YAML mapping. Fields are addressed with dotted paths such as
``source.rev``. Reads return the raw scalar text (so a sha256 made only of
digits is still the string that was written). Writes replace an existing
scalar where it stands, keeping the rest of the file untouched, and only
re-serialise the document when a field has to be created.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import yaml as _yaml

import recipebump.errors as errors

_logger = _logging.getLogger(__name__)

# Maps key paths to the scalar node holding their value
SpanRegistry = dict[tuple[str, ...], _yaml.ScalarNode]

# Scalar styles that occupy a single span of text and can be replaced in place
_SPLICEABLE_STYLES = (None, "'", '"')

_NULL_TAG = "tag:yaml.org,2002:null"


class _SpanTrackingLoader(_yaml.SafeLoader):
    """YAML loader that records the scalar node behind every mapping value.

    Construction is delegated to SafeLoader so values keep their normal
    Python types; the registry only remembers where each scalar lives in
    the source text.
    """

    def __init__(self, stream: _typing.Any) -> None:
        super().__init__(stream)
        self._spans: SpanRegistry = {}
        self._path_stack: list[str] = []

    def construct_sequence(
        self, node: _yaml.SequenceNode, deep: bool = False
    ) -> list[_typing.Any]:
        # Items get an index segment so `a.b` never matches a[i].b
        result: list[_typing.Any] = []
        for index, child in enumerate(node.value):
            self._path_stack.append(f"[{index}]")
            result.append(self.construct_object(child, deep=True))
            self._path_stack.pop()
        return result

    def construct_mapping(
        self, node: _yaml.MappingNode, deep: bool = False
    ) -> dict[_typing.Any, _typing.Any]:
        # Keys pulled in through `<<` merges share nodes with their anchor
        own_keys = {id(key_node) for key_node, _ in node.value}
        self.flatten_mapping(node)

        result: dict[_typing.Any, _typing.Any] = {}
        for key_node, value_node in node.value:
            key = self.construct_object(key_node, deep=True)
            self._path_stack.append(str(key))
            if isinstance(value_node, _yaml.ScalarNode) and id(key_node) in own_keys:
                self._spans[tuple(self._path_stack)] = value_node
            # deep=True so nested mappings see the current path prefix
            value = self.construct_object(value_node, deep=True)
            self._path_stack.pop()
            result[key] = value
        return result


def _parse(
    text: str, path: _pathlib.Path | None
) -> tuple[dict[str, _typing.Any], SpanRegistry]:
    loader = _SpanTrackingLoader(text)
    try:
        data = loader.get_single_data()
    except _yaml.YAMLError as e:
        raise errors.RecipeFormatError(path, str(e)) from e
    finally:
        loader.dispose()

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise errors.RecipeFormatError(path, "top level must be a mapping")
    return data, loader._spans


def _split(field: str) -> tuple[str, ...]:
    parts = tuple(field.split("."))
    if not all(parts):
        raise ValueError(f"Invalid field path: {field!r}")
    return parts


def _quote(value: str) -> str:
    # JSON string syntax is valid YAML double-quoted syntax
    return _json.dumps(value, ensure_ascii=False)


class RecipeDescriptor:
    """
    A recipe document held in memory.

    Edits are applied to the in-memory text; nothing touches the disk until
    save() is called.
    """

    def __init__(self, text: str, path: _pathlib.Path | None = None) -> None:
        self._path = path
        self._text = text
        self._data, self._spans = _parse(text, path)
        self._dirty = False

    @classmethod
    def load(cls, path: _pathlib.Path) -> RecipeDescriptor:
        """
        Load a descriptor from disk.

        Raises:
            RecipeNotFoundError: If the file does not exist.
            RecipeFormatError: If the file cannot be read or is not a YAML mapping.
        """
        if not path.is_file():
            raise errors.RecipeNotFoundError(path)
        _logger.debug("Loading recipe %s", path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise errors.RecipeFormatError(path, f"cannot read file: {e}") from e
        return cls(text, path)

    @property
    def path(self) -> _pathlib.Path | None:
        """File the descriptor was loaded from, if any."""
        return self._path

    @property
    def text(self) -> str:
        """Current document text, including unsaved edits."""
        return self._text

    @property
    def data(self) -> dict[str, _typing.Any]:
        """Parsed document (read-only view; edit through set())."""
        return self._data

    @property
    def dirty(self) -> bool:
        """Whether there are edits not yet written by save()."""
        return self._dirty

    def get(self, field: str, default: str = "") -> str:
        """
        Read a field as a string.

        Missing fields and null values return ``default``. Scalars are
        returned as written in the source; other values are stringified.
        """
        value = self._lookup(_split(field))
        return default if value is None else value

    def has(self, field: str) -> bool:
        """Whether the field exists and is not null."""
        return self._lookup(_split(field)) is not None

    def _lookup(self, parts: tuple[str, ...]) -> str | None:
        node = self._spans.get(parts)
        if node is not None:
            return None if node.tag == _NULL_TAG else node.value

        value: _typing.Any = self._data
        for part in parts:
            if not isinstance(value, dict) or part not in value:
                return None
            value = value[part]
        return None if value is None else str(value)

    def set(self, field: str, value: str) -> None:
        """
        Set a field to a string value.

        Raises:
            RecipeFormatError: If a parent of the field exists but is not a mapping.
        """
        parts = _split(field)
        node = self._spans.get(parts)
        if node is not None and self._can_splice(node):
            self._splice(node, value)
        else:
            self._rewrite(parts, value)
        self._data, self._spans = _parse(self._text, self._path)
        self._dirty = True
        _logger.debug("Set %s = %r", field, value)

    def save(self, path: _pathlib.Path | None = None) -> _pathlib.Path:
        """
        Write the document to ``path`` (default: where it was loaded from).

        Raises:
            RecipeWriteError: If the file cannot be written.
        """
        target = path or self._path
        if target is None:
            raise ValueError("No path to save the recipe to")
        try:
            target.write_text(self._text, encoding="utf-8")
        except OSError as e:
            raise errors.RecipeWriteError(target, e.strerror or str(e)) from e
        self._path = target
        self._dirty = False
        _logger.debug("Wrote recipe %s", target)
        return target

    def _can_splice(self, node: _yaml.ScalarNode) -> bool:
        # A span starting with `&` or `!` carries an anchor or tag; aliases
        # point at their anchor's span, so they are caught here too
        return (
            node.style in _SPLICEABLE_STYLES
            and node.start_mark.line == node.end_mark.line
            and self._text[node.start_mark.index : node.start_mark.index + 1] not in ("&", "!")
        )

    def _splice(self, node: _yaml.ScalarNode, value: str) -> None:
        start = node.start_mark.index
        end = node.end_mark.index
        replacement = _quote(value)
        if start == end:
            # Empty value (`rev:`); the mark sits right after the colon
            replacement = " " + replacement
        self._text = self._text[:start] + replacement + self._text[end:]

    def _rewrite(self, parts: tuple[str, ...], value: str) -> None:
        _logger.debug(
            "Field %s is not an in-place scalar; re-serialising %s",
            ".".join(parts),
            self._path or "recipe",
        )
        data = _yaml.safe_load(self._text) or {}
        current = data
        for depth, part in enumerate(parts[:-1]):
            child = current.get(part)
            if child is None:
                child = {}
                current[part] = child
            elif not isinstance(child, dict):
                raise errors.RecipeFormatError(
                    self._path,
                    f"{'.'.join(parts[: depth + 1])} is not a mapping",
                )
            current = child
        current[parts[-1]] = value
        self._text = _yaml.safe_dump(
            data, sort_keys=False, default_flow_style=False, allow_unicode=True
        )
