"""
Shared plumbing for the YAML documents cryptoconf reads.

``BaseYamlLoader[T]`` parses a catalog or selection file into its pydantic
root model and remembers the result per resolved path.  Each subclass
names two things:

- ``_model_class``: the root model the mapping is validated against
- ``_document_error``: the ``CryptoconfError`` raised when the text is
  not YAML or its root is not a mapping

Schema mismatches inside a well-formed mapping still surface as
``pydantic.ValidationError`` so callers can show field-level detail.

Usage::

    from cryptoconf._loader_base import BaseYamlLoader
    from cryptoconf.errors import SelectionError

    class SelectionLoader(BaseYamlLoader[SelectionDocument]):
        _model_class = SelectionDocument
        _document_error = SelectionError
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, ClassVar, Generic, TypeVar

import yaml
from pydantic import BaseModel

from cryptoconf.errors import CryptoconfError

T = TypeVar("T", bound=BaseModel)


class BaseYamlLoader(Generic[T]):
    """Parse, validate and cache one kind of YAML document."""

    _model_class: type[T]
    _document_error: ClassVar[type[CryptoconfError]] = CryptoconfError
    _documents: ClassVar[dict[str, BaseModel]] = {}
    _logger: ClassVar[logging.Logger]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        cls._documents = {}
        cls._logger = logging.getLogger(cls.__module__)

    @classmethod
    def clear_cache(cls) -> None:
        cls._documents.clear()

    def load(self, path: Path) -> T:
        """Load the document at *path*, reusing an earlier parse of the same file.

        Raises:
            FileNotFoundError: If *path* does not exist.
            CryptoconfError: The loader's ``_document_error`` when the
                file is not YAML or its root is not a mapping.
            pydantic.ValidationError: If the mapping does not fit the model.
        """
        key = str(path.resolve())
        if key in self._documents:
            self._logger.debug("%s reusing %s", type(self).__name__, key)
            return self._documents[key]  # type: ignore[return-value]

        if not path.exists():
            raise FileNotFoundError(f"YAML file not found: {path}")

        doc = self._validate(path.read_text(encoding="utf-8"), str(path))
        self._documents[key] = doc
        self._log_loaded(doc, key)
        return doc

    def load_from_string(self, yaml_str: str) -> T:
        """Parse *yaml_str* without touching the cache."""
        return self._validate(yaml_str, "<string>")

    def _validate(self, text: str, source: str) -> T:
        return self._model_class.model_validate(self._read_mapping(text, source))

    def _read_mapping(self, text: str, source: str) -> dict[str, Any]:
        try:
            raw = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise self._document_error(f"{source} is not valid YAML: {exc}") from exc
        if not isinstance(raw, dict):
            raise self._document_error(
                f"{source} must hold a mapping at the document root, "
                f"found {type(raw).__name__}"
            )
        return raw

    def _log_loaded(self, doc: T, key: str) -> None:
        self._logger.debug("Loaded %s from %s", self._model_class.__name__, key)
