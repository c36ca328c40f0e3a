from typing import Any


def copy_json(value: Any) -> Any:
    """Copy nested dicts and lists with an explicit stack; other values are shared.

    Expression chains in solc output (``leftExpression`` of ``a + b + c + ...``) can be
    deeper than the interpreter's recursion limit, so this never recurses.
    """
    if not isinstance(value, dict | list):
        return value
    root: dict[Any, Any] | list[Any] = {} if isinstance(value, dict) else []
    stack: list[tuple[Any, Any]] = [(value, root)]
    while stack:
        source, target = stack.pop()
        items = source.items() if isinstance(source, dict) else enumerate(source)
        for key, item in items:
            copied = item
            if isinstance(item, dict | list):
                copied = {} if isinstance(item, dict) else []
                stack.append((item, copied))
            if isinstance(target, dict):
                target[key] = copied
            else:
                target.append(copied)
    return root
