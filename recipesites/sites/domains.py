"""Hostname → site ID routing table.

Adding a site means adding its hostnames here and a ``data/<site_id>.json``
config; the registry refuses to start if the two drift apart.
"""

DEFAULT_SITE_ID = "top5proteinrecipes"

DOMAIN_MAPPING: dict[str, str] = {
    # Production
    "top5proteinrecipes.com": "top5proteinrecipes",
    "www.top5proteinrecipes.com": "top5proteinrecipes",
    "top5ketorecipes.com": "top5ketorecipes",
    "www.top5ketorecipes.com": "top5ketorecipes",
    "top5veganrecipes.com": "top5veganrecipes",
    "www.top5veganrecipes.com": "top5veganrecipes",
    # Local development (127.0.0.1 protein.localhost keto.localhost vegan.localhost)
    "protein.localhost": "top5proteinrecipes",
    "protein.localhost:3000": "top5proteinrecipes",
    "keto.localhost": "top5ketorecipes",
    "keto.localhost:3000": "top5ketorecipes",
    "vegan.localhost": "top5veganrecipes",
    "vegan.localhost:3000": "top5veganrecipes",
    "localhost": "top5proteinrecipes",
    "localhost:3000": "top5proteinrecipes",
}
