"""Unit tests for reference decoding."""

import pytest

from wapi_client.core.refcodec import (
    ip_address_from_ref,
    network_from_ref,
    network_view_from_ref,
)


class TestNetworkViewFromRef:
    def test_decodes_name(self, network_view_ref):
        view = network_view_from_ref(network_view_ref)

        assert view is not None
        assert view.name == "global_view"
        assert view.ref == network_view_ref

    def test_name_taken_verbatim(self):
        view = network_view_from_ref("networkview/ZG5zLm5ldHdvcmtfdmlldyQx:my%20view/true")

        assert view.name == "my%20view"

    @pytest.mark.parametrize(
        "ref",
        [
            "",
            None,
            "network/ZG5zLm5ldHdvcmskODkuMC4wLjAvMjQvMjU:89.0.0.0/24/global_view",
            "networkview/ZG5zLm5ldHdvcmtfdmlldyQyMw:global_view",
            "garbage",
        ],
    )
    def test_no_match_returns_none(self, ref):
        assert network_view_from_ref(ref) is None


class TestNetworkFromRef:
    def test_decodes_cidr_and_view(self, network_ref):
        network = network_from_ref(network_ref)

        assert network is not None
        assert network.cidr == "89.0.0.0/24"
        assert network.network_view == "global_view"
        assert network.ref == network_ref

    def test_view_with_slashes_is_kept_whole(self):
        network = network_from_ref("network/ZG5zLm5ldHdvcmsk:10.1.0.0/16/legacy/view/name")

        assert network.cidr == "10.1.0.0/16"
        assert network.network_view == "legacy/view/name"

    @pytest.mark.parametrize(
        "ref",
        [
            "",
            None,
            "networkview/ZG5zLm5ldHdvcmtfdmlldyQyMw:global_view/false",
            "network/ZG5zLm5ldHdvcmsk:not-a-cidr/default",
            "network/ZG5zLm5ldHdvcmsk:10.0.0.0/24",
        ],
    )
    def test_no_match_returns_none(self, ref):
        assert network_from_ref(ref) is None


class TestIPAddressFromRef:
    def test_decodes_ip(self, fixed_address_ref):
        assert ip_address_from_ref(fixed_address_ref) == "12.0.10.1"

    @pytest.mark.parametrize(
        "ref",
        [
            "",
            None,
            "record:host/ZG5zLmhvc3QkLl9kZWZhdWx0:host.example.com/default",
            "fixedaddress/ZG5zLmJpbmRfY25h:12.0.10.1",
            "network/ZG5zLm5ldHdvcmskODkuMC4wLjAvMjQvMjU:89.0.0.0/24/global_view",
        ],
    )
    def test_no_match_returns_empty_string(self, ref):
        assert ip_address_from_ref(ref) == ""
