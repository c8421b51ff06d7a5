"""Rule list to stylesheet text."""

from pagewright.models import StyleRule

INDENT = "  "


def format_rule(rule: StyleRule, minify: bool = False) -> str:
    """Render one rule block (ignoring its media predicate)."""
    if minify:
        body = ";".join(f"{name}:{value}" for name, value in rule.properties.items())
        return f"{rule.selector}{{{body}}}"

    lines = [f"{rule.selector} {{"]
    lines.extend(f"{INDENT}{name}: {value};" for name, value in rule.properties.items())
    lines.append("}")
    return "\n".join(lines)


def format_media(media: str, rules: list[StyleRule], minify: bool = False) -> str:
    """Wrap rules in an ``@media`` block."""
    if minify:
        return f"@media {media}{{{''.join(format_rule(rule, True) for rule in rules)}}}"

    inner = "\n\n".join(format_rule(rule) for rule in rules)
    indented = "\n".join(f"{INDENT}{line}" if line else line for line in inner.split("\n"))
    return f"@media {media} {{\n{indented}\n}}"


def format_rules(rules: list[StyleRule], minify: bool = False) -> str:
    """
    Render a rule list.

    Plain rules keep their order; media rules follow, grouped by predicate
    in order of first appearance.
    """
    plain: list[StyleRule] = []
    media: dict[str, list[StyleRule]] = {}
    for rule in rules:
        if not rule.properties:
            continue
        if rule.media:
            media.setdefault(rule.media, []).append(rule)
        else:
            plain.append(rule)

    blocks = [format_rule(rule, minify) for rule in plain]
    blocks.extend(format_media(query, grouped, minify) for query, grouped in media.items())
    return ("" if minify else "\n\n").join(blocks)


__all__ = ["format_rule", "format_media", "format_rules"]
