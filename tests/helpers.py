# tests/helpers.py


def codes_of(findings):
    """Codes uit een lijst van findings (tuples) of Diagnostic objecten."""
    return [f[0] if isinstance(f, tuple) else f.code for f in findings]
