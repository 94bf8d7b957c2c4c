"""Site registry — resolves a Host header to a site and its configuration.

The registry is built once at process start and never mutated, so it is
shared by every request without locking.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from recipesites.core.config import Settings
from recipesites.core.errors import RegistryConfigError
from recipesites.models.site import SiteConfig
from recipesites.sites.domains import DEFAULT_SITE_ID, DOMAIN_MAPPING

logger = logging.getLogger(__name__)

PACKAGED_SITES_DIR = Path(__file__).parent / "data"


def strip_port(hostname: str) -> str:
    """``"a.example.com:3000"`` → ``"a.example.com"``. Bare hosts pass through."""
    return hostname.split(":", 1)[0]


class SiteRegistry:
    """Immutable hostname → site ID → SiteConfig lookup."""

    __slots__ = ("_domains", "_configs", "_default_site_id")

    def __init__(
        self,
        domains: Mapping[str, str],
        configs: Mapping[str, SiteConfig],
        default_site_id: str,
    ) -> None:
        _validate(domains, configs, default_site_id)
        self._domains = MappingProxyType(dict(domains))
        self._configs = MappingProxyType(dict(configs))
        self._default_site_id = default_site_id

    @property
    def default_site_id(self) -> str:
        return self._default_site_id

    def resolve(self, hostname: str) -> str:
        """Return the site ID for a raw Host value. Never raises.

        The full string is tried first so port-qualified dev aliases can be
        registered explicitly; then the bare host; then the default site.
        """
        site_id = self._domains.get(hostname)
        if site_id is None:
            site_id = self._domains.get(strip_port(hostname))
        if site_id is None:
            logger.debug("Unknown host %r, falling back to %s", hostname, self._default_site_id)
            return self._default_site_id
        return site_id

    def get_config(self, site_id: str) -> SiteConfig:
        return self._configs[site_id]

    def config_for_host(self, hostname: str) -> SiteConfig:
        return self._configs[self.resolve(hostname)]

    def is_known_host(self, hostname: str) -> bool:
        return hostname in self._domains or strip_port(hostname) in self._domains

    def hostnames(self) -> tuple[str, ...]:
        return tuple(sorted(self._domains))

    def site_ids(self) -> tuple[str, ...]:
        return tuple(self._configs)

    def configs(self) -> tuple[SiteConfig, ...]:
        return tuple(self._configs.values())


def _validate(
    domains: Mapping[str, str],
    configs: Mapping[str, SiteConfig],
    default_site_id: str,
) -> None:
    if not domains:
        raise RegistryConfigError("Domain mapping is empty")

    for key, config in configs.items():
        if config.id != key:
            raise RegistryConfigError(
                f"Config registered as '{key}' declares id '{config.id}'"
            )

    missing = sorted({*domains.values(), default_site_id} - configs.keys())
    if missing:
        raise RegistryConfigError(f"No site config for: {', '.join(missing)}")

    unreachable = sorted(configs.keys() - {*domains.values(), default_site_id})
    if unreachable:
        raise RegistryConfigError(
            f"Site configs not reachable from any hostname: {', '.join(unreachable)}"
        )


def load_site_configs(directory: Path) -> dict[str, SiteConfig]:
    """Load every ``*.json`` in *directory*, keyed by the config's ``id``."""
    configs: dict[str, SiteConfig] = {}
    for path in sorted(directory.glob("*.json")):
        try:
            config = SiteConfig.model_validate_json(path.read_text(encoding="utf-8"))
        except ValidationError as exc:
            raise RegistryConfigError(f"Invalid site config {path.name}: {exc}") from exc
        if config.id in configs:
            raise RegistryConfigError(f"Site id '{config.id}' defined twice ({path.name})")
        configs[config.id] = config
    return configs


def build_registry(settings: Settings) -> SiteRegistry:
    """Build the production registry from the routing table and JSON configs."""
    directory = Path(settings.sites_dir) if settings.sites_dir else PACKAGED_SITES_DIR
    configs = load_site_configs(directory)
    registry = SiteRegistry(
        DOMAIN_MAPPING,
        configs,
        settings.default_site_id or DEFAULT_SITE_ID,
    )
    logger.info(
        "Site registry ready: %d sites, %d hostnames, default %s",
        len(configs),
        len(DOMAIN_MAPPING),
        registry.default_site_id,
    )
    return registry
