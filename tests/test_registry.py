"""Site registry: host resolution, config lookup and startup co-validation."""

import pytest

from recipesites.core.config import Settings
from recipesites.core.errors import RegistryConfigError
from recipesites.sites.domains import DEFAULT_SITE_ID, DOMAIN_MAPPING
from recipesites.sites.registry import SiteRegistry, build_registry, strip_port


def test_strip_port():
    assert strip_port("a.example.com:3000") == "a.example.com"
    assert strip_port("a.example.com") == "a.example.com"


def test_single_site_scenario(make_site):
    registry = SiteRegistry(
        {"a.example.com": "siteA", "a.example.com:3000": "siteA"},
        {"siteA": make_site("siteA", "a.example.com")},
        default_site_id="siteA",
    )
    assert registry.resolve("a.example.com") == "siteA"
    assert registry.resolve("a.example.com:3000") == "siteA"
    assert registry.resolve("unknown.example.com") == "siteA"


def test_registered_hosts_resolve(scenario_registry):
    assert scenario_registry.resolve("b.example.com") == "siteB"
    assert scenario_registry.resolve("a.example.com:3000") == "siteA"


def test_unregistered_port_falls_back_to_bare_host(scenario_registry):
    # Only the bare host is registered for siteB
    assert scenario_registry.resolve("b.example.com:8080") == "siteB"


@pytest.mark.parametrize("host", ["", "nope.example.com", "nope.example.com:3000", "B.EXAMPLE.COM"])
def test_unknown_hosts_fall_back_to_default(scenario_registry, host):
    assert scenario_registry.resolve(host) == "siteA"
    assert scenario_registry.is_known_host(host) is False


def test_is_known_host(scenario_registry):
    assert scenario_registry.is_known_host("b.example.com")
    assert scenario_registry.is_known_host("b.example.com:9999")


def test_every_resolved_site_has_config(scenario_registry):
    for host in [*scenario_registry.hostnames(), "elsewhere.test"]:
        site_id = scenario_registry.resolve(host)
        assert scenario_registry.get_config(site_id).id == site_id


def test_config_for_host(scenario_registry):
    assert scenario_registry.config_for_host("b.example.com").domain == "b.example.com"


def test_registry_is_read_only(scenario_registry):
    with pytest.raises(TypeError):
        scenario_registry._domains["evil.example.com"] = "siteB"
    with pytest.raises(AttributeError):
        scenario_registry.extra = 1


def test_registry_copies_input_mappings(make_site):
    domains = {"a.example.com": "siteA"}
    registry = SiteRegistry(domains, {"siteA": make_site("siteA", "a.example.com")}, "siteA")
    domains["b.example.com"] = "siteB"
    assert registry.hostnames() == ("a.example.com",)


# ── Co-validation ────────────────────────────────────────────


def test_host_pointing_at_missing_config_is_rejected(make_site):
    with pytest.raises(RegistryConfigError, match="siteB"):
        SiteRegistry(
            {"a.example.com": "siteA", "b.example.com": "siteB"},
            {"siteA": make_site("siteA", "a.example.com")},
            "siteA",
        )


def test_default_without_config_is_rejected(make_site):
    with pytest.raises(RegistryConfigError, match="ghost"):
        SiteRegistry(
            {"a.example.com": "siteA"},
            {"siteA": make_site("siteA", "a.example.com")},
            "ghost",
        )


def test_unreachable_config_is_rejected(make_site):
    with pytest.raises(RegistryConfigError, match="not reachable"):
        SiteRegistry(
            {"a.example.com": "siteA"},
            {
                "siteA": make_site("siteA", "a.example.com"),
                "orphan": make_site("orphan", "orphan.example.com"),
            },
            "siteA",
        )


def test_config_id_mismatch_is_rejected(make_site):
    with pytest.raises(RegistryConfigError, match="declares id"):
        SiteRegistry(
            {"a.example.com": "siteA"},
            {"siteA": make_site("other", "a.example.com")},
            "siteA",
        )


def test_empty_domain_table_is_rejected(make_site):
    with pytest.raises(RegistryConfigError):
        SiteRegistry({}, {"siteA": make_site("siteA", "a.example.com")}, "siteA")


# ── Production registry ──────────────────────────────────────


def test_packaged_registry_builds():
    registry = build_registry(Settings())
    assert registry.default_site_id == DEFAULT_SITE_ID
    assert set(registry.site_ids()) == set(DOMAIN_MAPPING.values())
    for host in DOMAIN_MAPPING:
        assert registry.config_for_host(host).id == DOMAIN_MAPPING[host]


def test_packaged_registry_dev_aliases():
    registry = build_registry(Settings())
    assert registry.resolve("keto.localhost:3000") == "top5ketorecipes"
    assert registry.resolve("www.top5veganrecipes.com") == "top5veganrecipes"
    assert registry.resolve("localhost:4000") == "top5proteinrecipes"


def test_default_site_override():
    settings = Settings(default_site_id="top5ketorecipes")
    assert build_registry(settings).resolve("unknown.test") == "top5ketorecipes"
