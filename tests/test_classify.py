"""Tests for host classification."""

import pytest

from linkvet.analyzer.classify import HostClassifier, classify_host


@pytest.mark.parametrize(
    "host",
    [
        "nam12.safelinks.protection.outlook.com",
        "protect-us.mimecast.com",
        "protect.mimecast-offshore.com",
        "urldefense.proofpoint.com",
        "URLDEFENSE.COM",
    ],
)
def test_gateway_hosts(host):
    result = classify_host(host, f"https://{host}/x")
    assert result.is_gateway
    assert not result.is_vendor_asset
    assert result.flags == []


def test_plain_host_is_unclassified():
    result = classify_host("example.com", "https://example.com/")
    assert not result.is_gateway
    assert not result.is_vendor_asset
    assert result.flags == []


def test_zendesk_asset():
    result = classify_host("acme.zendesk.com", "https://acme.zendesk.com/hc/articles/1")
    assert result.is_vendor_asset
    assert result.flags == ["Zendesk asset"]


def test_salesforce_force_domain():
    result = classify_host("acme.my.site.force.com", "https://acme.my.site.force.com/login")
    assert result.is_vendor_asset
    assert result.flags == ["Salesforce asset"]


def test_substring_match_not_suffix_match():
    # Containment, so a look-alike host still matches.
    result = classify_host("zendesk.com.attacker.example", "https://zendesk.com.attacker.example/")
    assert result.is_vendor_asset


def test_cloudfront_with_file_extension():
    result = classify_host("d1234.cloudfront.net", "https://d1234.cloudfront.net/img/LOGO.PNG")
    assert result.is_vendor_asset
    assert result.flags == ["CloudFront asset"]


def test_cloudfront_without_file_extension():
    result = classify_host("d1234.cloudfront.net", "https://d1234.cloudfront.net/login")
    assert not result.is_vendor_asset
    assert result.flags == []


def test_file_only_vendor_consumes_match_slot():
    classifier = HostClassifier(
        vendor_patterns=[("cloudfront.net", "CloudFront"), ("zendesk.com", "Zendesk")],
    )
    result = classifier.classify("zendesk.com.d1.cloudfront.net", "https://zendesk.com.d1.cloudfront.net/")
    assert not result.is_vendor_asset
    assert result.flags == []


def test_gateway_and_vendor_flags_are_independent():
    classifier = HostClassifier(gateway_hosts=["zendesk.com"])
    result = classifier.classify("acme.zendesk.com", "https://acme.zendesk.com/")
    assert result.is_gateway
    assert result.is_vendor_asset
