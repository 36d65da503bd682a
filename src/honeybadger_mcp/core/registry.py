from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
from types import ModuleType
from typing import Callable, Iterable, List, Set, get_type_hints

from .context import HoneybadgerContext
from .prompts import PROMPT_DEFINITIONS, PROMPTS
from .resources import MIME_TYPE, resources_for

log = logging.getLogger("honeybadger_mcp.core.registry")

ContextProvider = Callable[[], HoneybadgerContext]


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "honeybadger_mcp.core.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield public coroutines defined in `module` that take `ctx` first."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        params = list(inspect.signature(func).parameters.values())
        if not params or params[0].name != "ctx":
            log.debug(
                "Skipping %s.%s: first parameter must be 'ctx'",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# --- Wrapping / registration ---------------------------------------------- #


def _as_provider(ctx: ContextProvider | HoneybadgerContext) -> ContextProvider:
    if isinstance(ctx, HoneybadgerContext):
        _ctx = ctx

        def provider() -> HoneybadgerContext:
            return _ctx

        return provider
    return ctx


def bind_context(func: Callable, ctx_provider: ContextProvider) -> Callable:
    """Return a wrapper that injects ctx and hides it from the signature."""
    original_sig = inspect.signature(func)
    type_hints = get_type_hints(func)

    new_params = []
    for i, (name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and name == "ctx":
            continue  # drop injected context
        ann = type_hints.get(name, param.annotation)
        new_params.append(param.replace(annotation=ann))

    return_ann = type_hints.get("return", original_sig.return_annotation)
    new_sig = inspect.Signature(parameters=new_params, return_annotation=return_ann)

    async def wrapped(*args, **kwargs):
        return await func(ctx_provider(), *args, **kwargs)

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    # pydantic.validate_call (resource templates, prompts) reads __annotations__
    annotations = {
        p.name: p.annotation
        for p in new_params
        if p.annotation is not inspect.Parameter.empty
    }
    if return_ann is not inspect.Signature.empty:
        annotations["return"] = return_ann
    wrapped.__annotations__ = annotations
    return wrapped


def register_discovered_tools(
    app,
    ctx_provider: ContextProvider | HoneybadgerContext,
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """Register discovered tools on an app that exposes a .tool decorator."""
    provider = _as_provider(ctx_provider)

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules or discover_tool_modules()
    seen_names: Set[str] = set()

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            app.tool(name=name)(bind_context(func, provider))
            seen_names.add(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return sorted(seen_names)


def register_resources(app, ctx: HoneybadgerContext) -> List[str]:
    """Register honeybadger:// resources; default-project ones only if configured."""
    provider = _as_provider(ctx)
    uris: List[str] = []
    for spec in resources_for(ctx):
        app.resource(
            spec.uri,
            name=spec.name,
            description=spec.description,
            mime_type=MIME_TYPE,
        )(bind_context(spec.handler, provider))
        uris.append(spec.uri)
        log.info("Registered resource: %s", spec.uri)
    return uris


def register_prompts(app, ctx: HoneybadgerContext) -> List[str]:
    provider = _as_provider(ctx)
    for name, func in PROMPTS.items():
        app.prompt(
            name=name, description=PROMPT_DEFINITIONS[name]["description"]
        )(bind_context(func, provider))
        log.info("Registered prompt: %s", name)
    return list(PROMPTS)


__all__ = [
    "bind_context",
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
    "register_resources",
    "register_prompts",
]
