"""Pure value semantics for flag sets.

Every function here takes the declared option names first and never
mutates its inputs. The three whole-value states (ABSENT, None, mapping)
are preserved by each transformation:

    normalize          input  -> full flag set, ABSENT/None passed through
    resolve_default    create -> full flag set from the default spec
    merge_for_write    update -> minimal stored value, None or ABSENT
    project_for_read   stored -> full flag set for output

Overlay order is always baseline <- previous <- incoming.
"""

import inspect
from collections.abc import Iterable, Mapping
from typing import Any

from optionfields.contracts.flags import (
    ABSENT,
    DefaultSpec,
    FieldInput,
    Flags,
    FlagSet,
    WriteContext,
)
from optionfields.core.canonical import normalize_for_canonical


def null_filled(options: Iterable[str]) -> FlagSet:
    """Baseline with every declared option mapped to None."""
    return dict.fromkeys(options)


def overlay(*layers: Any) -> FlagSet:
    """Merge layers left to right, later keys overriding earlier ones.

    ABSENT and None layers contribute nothing.

    Args:
        *layers: Flag mappings, ABSENT or None

    Returns:
        New dict holding the per-key result
    """
    merged: FlagSet = {}
    for layer in layers:
        if layer is ABSENT or layer is None:
            continue
        merged.update(layer)
    return merged


def compact(flags: Flags | None) -> FlagSet | None:
    """Reduce a flag set to its stored form.

    Values are normalized first (numpy.bool_ -> bool, pandas.NA -> None),
    then keys mapped to None are dropped. A flag set with nothing left is
    stored as None - an all-absent value is the same as a cleared one.
    """
    if flags is None:
        return None
    normalized = {key: normalize_for_canonical(value) for key, value in flags.items()}
    kept = {key: value for key, value in normalized.items() if value is not None}
    if not kept:
        return None
    return kept


def normalize(options: Iterable[str], value: FieldInput) -> FieldInput:
    """Expand a supplied value to cover every declared option.

    Args:
        options: Declared option names
        value: Flag mapping, None (clear) or ABSENT (untouched)

    Returns:
        ABSENT and None unchanged, otherwise the baseline overlaid with value
    """
    if value is ABSENT or value is None:
        return value
    return overlay(null_filled(options), value)


def resolve_default(
    options: Iterable[str],
    default: DefaultSpec,
    ctx: WriteContext,
) -> FlagSet:
    """Resolve the default flag set for a newly created item.

    Args:
        options: Declared option names
        default: None, a static flag mapping, or a callable taking ctx
        ctx: Write context for callable defaults

    Returns:
        The baseline overlaid with the default

    Raises:
        TypeError: If the callable returned an awaitable; use
            resolve_default_async for asynchronous defaults
    """
    baseline = null_filled(options)
    if default is None:
        return baseline
    if callable(default):
        result = default(ctx)
        if inspect.isawaitable(result):
            if inspect.iscoroutine(result):
                result.close()
            raise TypeError(
                "Default value callable returned an awaitable. "
                "Use resolve_default_async() for asynchronous defaults."
            )
        return overlay(baseline, result)
    return overlay(baseline, default)


async def resolve_default_async(
    options: Iterable[str],
    default: DefaultSpec,
    ctx: WriteContext,
) -> FlagSet:
    """Like resolve_default, awaiting the callable's result when needed."""
    baseline = null_filled(options)
    if default is None:
        return baseline
    if callable(default):
        result = default(ctx)
        if inspect.isawaitable(result):
            result = await result
        return overlay(baseline, result)
    return overlay(baseline, default)


def merge_for_write(
    options: Iterable[str],
    previous: Flags | None | Any,
    incoming: FieldInput,
) -> FieldInput:
    """Compute the value to persist for an update.

    Args:
        options: Declared option names
        previous: Currently stored value (mapping, None, or ABSENT on create)
        incoming: Value supplied by the write

    Returns:
        ABSENT if the write did not touch the field (caller must not
        write), None to clear it, otherwise the minimal flag set holding
        only True/False values
    """
    # Kept as two checks: ABSENT and None mean different things to the caller
    if incoming is ABSENT:
        return ABSENT
    if incoming is None:
        return None

    merged = overlay(null_filled(options), previous, incoming)
    return compact(merged)


def project_for_read(options: Iterable[str], stored: Mapping[str, Any] | None) -> FlagSet:
    """Expand a stored value into the output shape.

    Only declared options are projected; keys left over from options
    that were since removed are not returned.
    """
    baseline = null_filled(options)
    if stored is None or stored is ABSENT:
        return baseline
    for key in baseline:
        if key in stored:
            baseline[key] = stored[key]
    return baseline
