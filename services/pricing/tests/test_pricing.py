from types import MappingProxyType

import pytest
from fastapi.testclient import TestClient

from pricing_service.main import app
from pricing_service.domain import catalog
from pricing_service.core_settings import Settings

client = TestClient(app)


def validate(body):
    return client.post('/api/pricing/coupons/validate', json=body)


def test_health():
    resp = client.get('/api/pricing/health')
    assert resp.status_code == 200
    assert resp.json() == {'ok': True, 'via': '/api/pricing/health'}


def test_known_price():
    resp = client.get('/api/pricing/price', params={'sku': 'SKU-001'})
    assert resp.status_code == 200
    assert resp.json() == {'ok': True, 'sku': 'SKU-001', 'price': 100}


def test_second_price():
    assert client.get('/api/pricing/price', params={'sku': 'SKU-002'}).json()['price'] == 50


@pytest.mark.parametrize('params', [{'sku': 'UNKNOWN'}, {}, {'sku': ''}])
def test_missing_price(params):
    resp = client.get('/api/pricing/price', params=params)
    assert resp.status_code == 404
    assert resp.json() == {'ok': False, 'reason': 'no_price'}


def test_valid_coupon():
    resp = validate({'code': 'SAVE10', 'itemsTotal': 200})
    assert resp.status_code == 200
    assert resp.json() == {'valid': True, 'discount': 20, 'final': 180}


def test_numeric_string_total_is_coerced():
    assert validate({'code': 'SAVE10', 'itemsTotal': '50'}).json() == {'valid': True, 'discount': 5, 'final': 45}


def test_whole_amounts_are_sent_as_integers():
    price = client.get('/api/pricing/price', params={'sku': 'SKU-001'})
    assert isinstance(price.json()['price'], int)
    assert '100.0' not in price.text

    coupon = validate({'code': 'SAVE10', 'itemsTotal': 200}).json()
    assert isinstance(coupon['discount'], int)
    assert isinstance(coupon['final'], int)


def test_fractional_amounts_keep_decimals():
    assert validate({'code': 'SAVE10', 'itemsTotal': 55}).json() == {'valid': True, 'discount': 5.5, 'final': 49.5}


@pytest.mark.parametrize('total', [None, 'abc', [], '', 10 ** 400])
def test_non_numeric_total_counts_as_zero(total):
    assert validate({'code': 'SAVE10', 'itemsTotal': total}).json() == {'valid': True, 'discount': 0, 'final': 0}


def test_absent_total_counts_as_zero():
    assert validate({'code': 'SAVE10'}).json() == {'valid': True, 'discount': 0, 'final': 0}


@pytest.mark.parametrize('body', [
    {'code': 'NOPE', 'itemsTotal': 100},
    {'code': 'EXPIRED15', 'itemsTotal': 100},
    {'itemsTotal': 100},
    {'code': 10, 'itemsTotal': 100},
    {'code': ['SAVE10'], 'itemsTotal': 100},
    {},
])
def test_invalid_coupon_is_not_an_http_error(body):
    resp = validate(body)
    assert resp.status_code == 200
    assert resp.json() == {'valid': False, 'reason': 'invalid'}


def test_missing_body():
    resp = client.post('/api/pricing/coupons/validate')
    assert resp.status_code == 200
    assert resp.json() == {'valid': False, 'reason': 'invalid'}


def test_final_never_negative(monkeypatch):
    monkeypatch.setattr(catalog, 'COUPONS', MappingProxyType({
        'ALL': catalog.Coupon(code='ALL', value=150, active=True),
    }))
    assert validate({'code': 'ALL', 'itemsTotal': 100}).json() == {'valid': True, 'discount': 150, 'final': 0}


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        catalog.PRICES['SKU-003'] = 1
    with pytest.raises(TypeError):
        catalog.COUPONS['FREE'] = catalog.Coupon(code='FREE', value=100, active=True)


def test_listen_port_prefers_port(monkeypatch):
    monkeypatch.delenv('PORT', raising=False)
    monkeypatch.delenv('PRICING_PORT', raising=False)
    assert Settings(_env_file=None).listen_port == 4003

    monkeypatch.setenv('PRICING_PORT', '5000')
    assert Settings(_env_file=None).listen_port == 5000

    monkeypatch.setenv('PORT', '8080')
    assert Settings(_env_file=None).listen_port == 8080
