from flask import current_app, has_app_context


def format_currency(value, fmt=None):
    """Formatta un valore numerico usando il formato definito in `FORMATO_VALUTA`."""
    if fmt is None:
        fmt = current_app.config.get('FORMATO_VALUTA', 'R$ {:.2f}') if has_app_context() else 'R$ {:.2f}'

    try:
        val = float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        val = 0.0

    return fmt.format(val)


def format_decimal(value, decimals=2):
    """Valore con un numero fisso di decimali, senza simbolo di valuta (testi dei report)"""
    try:
        v = float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        v = 0.0
    return f"{v:.{int(decimals)}f}"
