"""Tests for RateProvider and carrier error normalization."""

from __future__ import annotations

from datetime import timedelta

import pytest

from shiprate.domain.errors import ShippingError
from shiprate.domain.types import Location
from shiprate.infrastructure.carriers.base import (
    CarrierError,
    CarrierResponse,
    CarrierResponseError,
)
from shiprate.services.rates import (
    DROPOFF_TYPE,
    RateProvider,
    describe_carrier_error,
    normalize_service_name,
)
from tests.conftest import FakeRateLookup, FakeTransitLookup

_ORIGIN = Location(country="US", state="NY", city="New York", zip="10001")
_DESTINATION = Location(country="US", state="CA", city="LA", zip="90001")


def _response_error(params: dict, message: str = "raw failure") -> CarrierResponseError:
    return CarrierResponseError(message, response=CarrierResponse(params=params, message=message))


class TestDescribeCarrierError:
    def test_generic_description(self) -> None:
        error = _response_error({"Response": {"Error": {"ErrorDescription": "Invalid address"}}})
        assert describe_carrier_error(error) == "Invalid address"

    def test_eparcel_status_message(self) -> None:
        error = _response_error({"eparcel": {"error": {"statusMessage": "Bad postal code"}}})
        assert describe_carrier_error(error) == "Bad postal code"

    def test_generic_wins_over_eparcel(self) -> None:
        error = _response_error(
            {
                "Response": {"Error": {"ErrorDescription": "generic"}},
                "eparcel": {"error": {"statusMessage": "eparcel"}},
            }
        )
        assert describe_carrier_error(error) == "generic"

    def test_eparcel_skipped_when_not_carrier_specific(self) -> None:
        error = _response_error({"eparcel": {"error": {"statusMessage": "Bad postal code"}}})
        assert describe_carrier_error(error, carrier_specific=False) == "raw failure"

    def test_falls_back_to_message(self) -> None:
        assert describe_carrier_error(_response_error({"Response": "odd"})) == "raw failure"
        assert describe_carrier_error(CarrierError("timeout")) == "timeout"


class TestNormalizeServiceName:
    def test_html_entities(self) -> None:
        assert normalize_service_name("UPS Ground&#174;") == "UPS Ground®"
        assert normalize_service_name("Priority &amp; Express") == "Priority & Express"

    def test_bytes_decoded_as_utf8(self) -> None:
        assert normalize_service_name("Expédition".encode()) == "Expédition"

    def test_plain_name_unchanged(self) -> None:
        assert normalize_service_name("Ground") == "Ground"


class TestFetchRates:
    def test_returns_normalized_table(self) -> None:
        lookup = FakeRateLookup({"Ground": 1050, b"Priority &amp; Express": 2400})
        rates = RateProvider(lookup).fetch_rates(_ORIGIN, _DESTINATION, [])
        assert rates == {"Ground": 1050, "Priority & Express": 2400}

    def test_requests_courier_dropoff(self) -> None:
        lookup = FakeRateLookup({"Ground": 1})
        RateProvider(lookup).fetch_rates(_ORIGIN, _DESTINATION, [])
        [call] = lookup.calls
        assert call["options"] == {"dropoff_type": DROPOFF_TYPE}
        assert call["origin"] == _ORIGIN
        assert call["destination"] == _DESTINATION

    def test_error_becomes_shipping_error(self) -> None:
        error = _response_error({"Response": {"Error": {"ErrorDescription": "Invalid address"}}})
        provider = RateProvider(FakeRateLookup(error=error))
        with pytest.raises(ShippingError) as excinfo:
            provider.fetch_rates(_ORIGIN, _DESTINATION, [])
        assert excinfo.value.message == "Shipping Error: Invalid address"
        assert excinfo.value.__cause__ is error

    def test_eparcel_error(self) -> None:
        error = _response_error({"eparcel": {"error": {"statusMessage": "Bad postal code"}}})
        provider = RateProvider(FakeRateLookup(error=error, name="CanadaPost"))
        with pytest.raises(ShippingError, match="Shipping Error: Bad postal code"):
            provider.fetch_rates(_ORIGIN, _DESTINATION, [])

    def test_carrier_name(self) -> None:
        assert RateProvider(FakeRateLookup(name="USPS")).carrier == "USPS"


class TestFetchTransitTime:
    def test_unsupported_lookup(self) -> None:
        provider = RateProvider(FakeRateLookup())
        assert provider.supports_transit_time is False
        assert provider.fetch_transit_time(_ORIGIN, _DESTINATION, []) is None

    def test_times_normalized(self) -> None:
        lookup = FakeTransitLookup({"UPS Ground&#174;": timedelta(days=3)})
        provider = RateProvider(lookup)
        assert provider.supports_transit_time is True
        times = provider.fetch_transit_time(_ORIGIN, _DESTINATION, [])
        assert times == {"UPS Ground®": timedelta(days=3)}

    def test_non_mapping_reply_is_none(self) -> None:
        provider = RateProvider(FakeTransitLookup(["not", "a", "table"]))
        assert provider.fetch_transit_time(_ORIGIN, _DESTINATION, []) is None

    def test_error_ignores_eparcel_path(self) -> None:
        error = _response_error({"eparcel": {"error": {"statusMessage": "Bad postal code"}}})
        provider = RateProvider(FakeTransitLookup(transit_error=error))
        with pytest.raises(ShippingError) as excinfo:
            provider.fetch_transit_time(_ORIGIN, _DESTINATION, [])
        assert excinfo.value.message == "Shipping Error: raw failure"
