"""Astroid Gateway - Infrastructure implementation of AstroidProtocol."""

import logging
from pathlib import PurePosixPath

import astroid
from astroid.exceptions import AstroidBuildingError, AstroidSyntaxError

from convention_linter.domain.errors import ParseError
from convention_linter.domain.protocols import AstroidProtocol

logger: logging.Logger = logging.getLogger(__name__)


class AstroidGateway(AstroidProtocol):
    """Parses source text into astroid trees. Holds no state, so it pickles into pool workers."""

    def parse_source(self, text: str, path: str) -> astroid.nodes.Module:
        """
        Parse source text; any syntax or build failure becomes a ParseError.

        The built module is evicted from the astroid manager cache so a long
        run does not keep every tree it has seen alive.
        """
        module_name = self.get_module_name(path)
        try:
            module = astroid.parse(text, module_name=module_name, path=path)
        except AstroidSyntaxError as exc:
            error = exc.error
            line = getattr(error, "lineno", None) or 0
            message = getattr(error, "msg", None) or str(error or exc)
            logger.debug("Syntax error in %s:%s: %s", path, line, message)
            raise ParseError(path, line, f"syntax error: {message}") from exc
        except (AstroidBuildingError, ValueError) as exc:
            logger.debug("Cannot build tree for %s: %s", path, exc)
            raise ParseError(path, 0, f"cannot parse: {exc}") from exc
        except (RecursionError, MemoryError) as exc:
            logger.warning("Cannot build tree for %s: %s", path, type(exc).__name__)
            raise ParseError(path, 0, f"cannot parse: {type(exc).__name__}: {exc}") from exc
        self.evict_module(module)
        return module

    @staticmethod
    def evict_module(module: astroid.nodes.Module) -> None:
        """Drop a parsed module from the manager cache unless another module owns the name."""
        cache = astroid.MANAGER.astroid_cache
        if cache.get(module.name) is module:
            del cache[module.name]

    @staticmethod
    def get_module_name(path: str) -> str:
        """Dotted module name for a relative path (pkg/mod.py -> pkg.mod)."""
        parts = list(PurePosixPath(path.replace("\\", "/")).with_suffix("").parts)
        if parts and parts[-1] == "__init__":
            parts.pop()
        return ".".join(part for part in parts if part not in (".", ".."))
