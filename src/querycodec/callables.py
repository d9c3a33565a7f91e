"""Callable rendering and resolution hooks.

Callables travel through query strings as `f`-tagged text. Encoding only
needs a rendering; decoding needs a hook that turns text back into a
callable. No hook is installed by default: a codec without one refuses
`f`-tagged input with `CallableDecodeError`.

Available hooks, from safest to least safe:

- `CallableRegistry` - explicit name -> callable table
- `resolve_dotted_path` - imports `package.module.attr`
- `evaluate_source` - executes source text (arbitrary code execution)
"""

import ast
import importlib
import inspect
import textwrap
from typing import Any, Callable, Dict, Iterator, Optional

from .exceptions import CallableDecodeError, InvalidConfigError
from .logger import get_logger
from .types import CallableHook

logger = get_logger(__name__)

_SOURCE_FILENAME = "<querycodec>"


# ===========================================================================
# Rendering
# ===========================================================================


def callable_path(fn: Callable[..., Any]) -> str:
    """Return the dotted import path of a callable (``module.qualname``)."""
    module = getattr(fn, "__module__", None)
    qualname = getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None)
    if qualname is None:
        qualname = type(fn).__qualname__
    if module:
        return f"{module}.{qualname}"
    return qualname


def render_callable(fn: Callable[..., Any]) -> str:
    """Render a callable as its source text, or its dotted path when no source exists.

    Builtins, C functions and callables defined in an interactive session
    have no retrievable source. Lambdas render only the lambda expression;
    when it cannot be singled out from its source line (several lambdas on
    one line, or a line that does not parse on its own) the dotted path is
    used instead.
    """
    try:
        source = inspect.getsource(fn)
    except (OSError, TypeError):
        return callable_path(fn)
    source = textwrap.dedent(source).strip()
    if getattr(fn, "__name__", None) == "<lambda>":
        return _lambda_expression(source) or callable_path(fn)
    return source


def _lambda_expression(source: str) -> Optional[str]:
    """Return the single outermost lambda expression in `source`, if there is one."""
    try:
        tree = ast.parse(source)
    except SyntaxError:
        return None
    lambdas = [node for node in ast.walk(tree) if isinstance(node, ast.Lambda)]
    inner = {
        id(child)
        for node in lambdas
        for child in ast.walk(node)
        if child is not node and isinstance(child, ast.Lambda)
    }
    outermost = [node for node in lambdas if id(node) not in inner]
    if len(outermost) != 1:
        logger.debug("Cannot isolate lambda in source %r", source)
        return None
    return ast.get_source_segment(source, outermost[0])


# ===========================================================================
# Resolution hooks
# ===========================================================================


def resolve_dotted_path(text: str) -> Callable[..., Any]:
    """Import ``package.module.attr[.attr...]`` and return the callable it names.

    Raises:
        CallableDecodeError: If nothing importable and callable matches the path
    """
    path = text.strip()
    parts = path.split(".")
    if len(parts) < 2 or not all(part.isidentifier() for part in parts):
        raise CallableDecodeError("Not a dotted path", text=text)

    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target: Any = importlib.import_module(module_name)
        except ImportError:
            continue
        try:
            for attr in parts[split:]:
                target = getattr(target, attr)
        except AttributeError as exc:
            raise CallableDecodeError("Attribute not found", text=text, module=module_name) from exc
        if not callable(target):
            raise CallableDecodeError("Path does not name a callable", text=text)
        logger.debug("Resolved callable %s from module %s", path, module_name)
        return target

    raise CallableDecodeError("Module not found", text=text)


def evaluate_source(text: str) -> Callable[..., Any]:
    """Execute callable source text and return the resulting function.

    Accepts a lambda expression, any expression evaluating to a callable, or
    a ``def`` statement (the last function defined is returned). This runs
    arbitrary code; install it as a hook only for trusted input.

    Raises:
        CallableDecodeError: If the text fails to compile, run, or produce a callable
    """
    source = textwrap.dedent(text).strip()
    namespace: Dict[str, Any] = {}
    try:
        tree = ast.parse(source, filename=_SOURCE_FILENAME)
    except SyntaxError as exc:
        raise CallableDecodeError("Invalid callable source", text=text) from exc

    try:
        if len(tree.body) == 1 and isinstance(tree.body[0], ast.Expr):
            value = eval(compile(source, _SOURCE_FILENAME, "eval"), namespace)
        else:
            defined = [
                node.name
                for node in tree.body
                if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef))
            ]
            if not defined:
                raise CallableDecodeError("Source defines no callable", text=text)
            exec(compile(tree, _SOURCE_FILENAME, "exec"), namespace)
            value = namespace[defined[-1]]
    except CallableDecodeError:
        raise
    except Exception as exc:
        raise CallableDecodeError("Callable source raised while evaluating", text=text, error=str(exc)) from exc

    if not callable(value):
        raise CallableDecodeError("Source does not evaluate to a callable", text=text)
    return value


class CallableRegistry:
    """Explicit name -> callable table usable as a codec hook.

    Instances are callable, so a registry can be passed directly as
    ``ValueCodec(callable_hook=registry)``.

    Example:
        >>> registry = CallableRegistry()
        >>> @registry.register
        ... def by_name(item):
        ...     return item["name"]
        >>> registry.resolve("by_name") is by_name
        True
    """

    def __init__(self, callables: Optional[Dict[str, Callable[..., Any]]] = None) -> None:
        self._callables: Dict[str, Callable[..., Any]] = {}
        for name, fn in (callables or {}).items():
            self.register(fn, name=name)

    def register(
        self, fn: Optional[Callable[..., Any]] = None, *, name: Optional[str] = None
    ) -> Any:
        """Register a callable under `name` (default: its ``__name__``).

        Works as a plain call, a bare decorator or ``@register(name=...)``.
        """
        if fn is None:
            return lambda inner: self.register(inner, name=name)
        if not callable(fn):
            raise InvalidConfigError("Only callables can be registered", name=name, value=fn)
        key = name or getattr(fn, "__name__", None)
        if not key:
            raise InvalidConfigError("Callable has no name; pass name=", value=fn)
        self._callables[key] = fn
        return fn

    def resolve(self, text: str) -> Callable[..., Any]:
        key = text.strip()
        try:
            return self._callables[key]
        except KeyError:
            raise CallableDecodeError("Callable not registered", text=text) from None

    __call__ = resolve

    def __contains__(self, name: object) -> bool:
        return name in self._callables

    def __len__(self) -> int:
        return len(self._callables)

    def __iter__(self) -> Iterator[str]:
        return iter(self._callables)


def load_callable_hook(path: Optional[str]) -> Optional[CallableHook]:
    """Load a callable hook from a dotted path (e.g., ``QUERY_CALLABLE_HOOK``).

    Returns:
        The hook, or None when `path` is empty

    Raises:
        InvalidConfigError: If the path cannot be imported or is not callable
    """
    if not path:
        return None
    try:
        hook = resolve_dotted_path(path)
    except CallableDecodeError as exc:
        raise InvalidConfigError("Cannot load callable hook", config_key="QUERY_CALLABLE_HOOK", value=path) from exc
    logger.debug("Loaded callable hook %s", path)
    return hook
