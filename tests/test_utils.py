from datetime import date, datetime

import pytest

from financeio.services import get_month_boundaries, get_timeframe_boundaries, period_key
from financeio.utils import ValidationUtils, get_field, to_date
from financeio.utils.formatting import format_currency, format_decimal


def test_format_currency_uses_configured_format(ctx):
    assert format_currency(1234.5) == 'R$ 1234.50'
    assert format_currency(None) == 'R$ 0.00'
    ctx.config['FORMATO_VALUTA'] = '{:.1f} BRL'
    assert format_currency('7') == '7.0 BRL'


def test_format_currency_without_app_context():
    assert format_currency('abc') == 'R$ 0.00'
    assert format_decimal(2 / 3) == '0.67'
    assert format_decimal(12, 1) == '12.0'


def test_validate_amount():
    assert ValidationUtils.validate_amount('10,5') == 10.5
    assert ValidationUtils.validate_amount(0) == 0
    with pytest.raises(ValueError):
        ValidationUtils.validate_amount(-0.01)
    with pytest.raises(ValueError):
        ValidationUtils.validate_amount(None)
    for value in ('nan', float('inf'), 'Infinity'):
        with pytest.raises(ValueError):
            ValidationUtils.validate_amount(value)


def test_field_access_on_dicts_and_objects():
    class Row:
        amount = 3
    assert get_field({'amount': 3}, 'amount') == get_field(Row(), 'amount') == 3
    assert to_date('2026-10-19T10:00:00') == date(2026, 10, 19)
    assert to_date(datetime(2026, 10, 19, 8)) == date(2026, 10, 19)


def test_period_boundaries():
    assert get_month_boundaries(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
    assert get_timeframe_boundaries('week', date(2026, 10, 19)) == (date(2026, 10, 13), date(2026, 10, 19))
    assert get_timeframe_boundaries('year', date(2026, 10, 19)) == (date(2026, 1, 1), date(2026, 12, 31))
    assert period_key(date(2026, 3, 5)) == '2026-03'
    with pytest.raises(ValueError):
        get_timeframe_boundaries('decade')
