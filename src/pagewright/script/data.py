"""Page data and component property declarations."""

import copy
from typing import Any

from pagewright.core import Issue, ScriptError, ValidationReport
from pagewright.models import PropertySpec, Variable, VariableType
from pagewright.validation import is_valid_identifier

from .formatter import JsExpression, to_js_literal
from .identifiers import is_reserved

ZERO_VALUES: dict[VariableType, Any] = {
    VariableType.STRING: "",
    VariableType.NUMBER: 0,
    VariableType.BOOLEAN: False,
    VariableType.ARRAY: [],
    VariableType.OBJECT: {},
}

# Property type constructors understood by the runtime
PROPERTY_TYPES: dict[VariableType, str] = {
    VariableType.STRING: "String",
    VariableType.NUMBER: "Number",
    VariableType.BOOLEAN: "Boolean",
    VariableType.ARRAY: "Array",
    VariableType.OBJECT: "Object",
}


def zero_value(var_type: VariableType | str | None) -> Any:
    """Type-appropriate empty value; ``None`` (null) for unknown types."""
    try:
        return copy.deepcopy(ZERO_VALUES[VariableType(var_type)])
    except ValueError:
        return None


def matches_type(value: Any, var_type: VariableType) -> bool:
    if value is None:
        return True
    if var_type == VariableType.STRING:
        return isinstance(value, str)
    if var_type == VariableType.NUMBER:
        return isinstance(value, (int, float)) and not isinstance(value, bool)
    if var_type == VariableType.BOOLEAN:
        return isinstance(value, bool)
    if var_type == VariableType.ARRAY:
        return isinstance(value, list)
    if var_type == VariableType.OBJECT:
        return isinstance(value, dict)
    return True


def validate_names(names: list[tuple[str, str]], kind: str, report: ValidationReport | None = None) -> ValidationReport:
    """
    Check identifier syntax, reserved words and uniqueness.

    Args:
        names: ``(name, path)`` pairs in declaration order
        kind: Noun used in messages ("variable", "property", ...)
        report: Report to extend; a new one when omitted

    Returns:
        The report with one error per offending name
    """
    report = report or ValidationReport()
    seen: set[str] = set()
    for name, path in names:
        if not is_valid_identifier(name):
            report.error("INVALID_VARIABLE_NAME", f"Invalid {kind} name: {name!r}", path)
        elif is_reserved(name):
            report.error("RESERVED_WORD", f"{kind.capitalize()} name is reserved: {name}", path)
        if name in seen:
            report.error("DUPLICATE_VARIABLE", f"Duplicate {kind} name: {name}", path)
        seen.add(name)
    return report


def validate_variables(variables: list[Variable], initial: dict[str, Any] | None = None) -> ValidationReport:
    """Validate declared variables, treating keys of ``initial`` as already declared."""
    names = [(key, f"data.{key}") for key in (initial or {})]
    names.extend((variable.name, f"variables.{variable.name}") for variable in variables)
    report = validate_names(names, "variable")

    for variable in variables:
        if not matches_type(variable.initial_value, variable.type):
            report.warn(
                "INVALID_INITIAL_VALUE",
                f"Initial value of {variable.name} does not match type {variable.type.value}",
                f"variables.{variable.name}",
            )
    return report


def validate_properties(specs: list[PropertySpec]) -> ValidationReport:
    report = validate_names([(spec.name, f"properties.{spec.name}") for spec in specs], "property")
    for spec in specs:
        if not matches_type(spec.default_value, spec.type):
            report.warn(
                "INVALID_INITIAL_VALUE",
                f"Default value of {spec.name} does not match type {spec.type.value}",
                f"properties.{spec.name}",
            )
    return report


def _raise_first(report: ValidationReport) -> None:
    if not report.valid:
        first: Issue = report.errors[0]
        raise ScriptError(first.message, code=first.code, details={"errors": [e.to_dict() for e in report.errors]})


def data_entries(variables: list[Variable], initial: dict[str, Any] | None = None) -> dict[str, Any]:
    entries = dict(initial or {})
    for variable in variables:
        value = variable.initial_value
        entries[variable.name] = zero_value(variable.type) if value is None else value
    return entries


def generate_data(variables: list[Variable], initial: dict[str, Any] | None = None, indent: str = "  ") -> str:
    """
    Render the ``data`` object literal.

    Raises:
        ScriptError: A name is invalid, reserved or declared twice
    """
    _raise_first(validate_variables(variables, initial))
    return to_js_literal(data_entries(variables, initial), indent)


def generate_properties(specs: list[PropertySpec], indent: str = "  ") -> str:
    """
    Render a component ``properties`` object literal.

    Raises:
        ScriptError: A name is invalid, reserved or declared twice
    """
    _raise_first(validate_properties(specs))
    entries: dict[str, Any] = {}
    for spec in specs:
        entry: dict[str, Any] = {
            "type": JsExpression(PROPERTY_TYPES.get(spec.type, "null")),
            "value": zero_value(spec.type) if spec.default_value is None else spec.default_value,
        }
        if spec.observer:
            entry["observer"] = spec.observer
        entries[spec.name] = entry
    return to_js_literal(entries, indent)


__all__ = [
    "ZERO_VALUES",
    "zero_value",
    "matches_type",
    "validate_names",
    "validate_variables",
    "validate_properties",
    "data_entries",
    "generate_data",
    "generate_properties",
]
