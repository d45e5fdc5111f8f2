"""
Service Catalog — available services, their tiers and pricing.
The catalog is static at runtime; display metadata is never mutated.
"""

from __future__ import annotations

from typing import Any

from comcraft.models.schemas import ServiceBundle, ServiceCatalogEntry, Selection, Tier


# ── Built-in services ────────────────────────────────────

_SERVICES: list[dict[str, Any]] = [
    {
        "id": "webshop",
        "name": "E-Commerce Development",
        "category": "Web Development",
        "description": "Complete online store with payment processing",
        "tiers": [
            {
                "name": "Starter Shop",
                "price": 1500,
                "features": [
                    "Up to 100 products",
                    "Basic design customization",
                    "Single payment gateway",
                    "Mobile responsive",
                    "Basic SEO",
                    "Order management",
                    "Customer accounts",
                ],
                "timeline": "2-3 weeks",
            },
            {
                "name": "Professional Shop",
                "price": 3500,
                "features": [
                    "Unlimited products",
                    "Custom design",
                    "Multiple payment gateways",
                    "Advanced SEO",
                    "Inventory management",
                    "Email automation",
                    "Analytics dashboard",
                    "Multi-language support",
                    "Discount & coupon system",
                ],
                "timeline": "3-5 weeks",
            },
            {
                "name": "Enterprise Shop",
                "price": 7500,
                "features": [
                    "Everything in Professional",
                    "Multi-vendor marketplace",
                    "Advanced analytics",
                    "Custom integrations",
                    "API access",
                    "Priority support",
                    "Performance optimization",
                    "Custom features on request",
                ],
                "timeline": "6-8 weeks",
            },
        ],
    },
    {
        "id": "discord_bot",
        "name": "Discord Bot Development",
        "category": "Automation",
        "description": "Custom Discord bot for your community",
        "tiers": [
            {
                "name": "Basic Bot",
                "price": 300,
                "features": [
                    "Up to 10 custom commands",
                    "Basic moderation",
                    "Role management",
                    "Welcome messages",
                    "Auto-responses",
                    "Simple games",
                ],
                "timeline": "1 week",
            },
            {
                "name": "Advanced Bot",
                "price": 800,
                "features": [
                    "Unlimited commands",
                    "Advanced moderation",
                    "Ticket system",
                    "Economy system",
                    "Music playback",
                    "Custom embeds",
                    "Logging system",
                    "Web dashboard",
                ],
                "timeline": "2-3 weeks",
            },
            {
                "name": "AI-Powered Bot",
                "price": 1500,
                "features": [
                    "Everything in Advanced",
                    "AI chat integration",
                    "Natural language processing",
                    "Smart auto-moderation",
                    "Sentiment analysis",
                    "Custom AI training",
                    "Advanced analytics",
                ],
                "timeline": "3-4 weeks",
            },
        ],
    },
    {
        "id": "website",
        "name": "Website Development",
        "category": "Web Development",
        "description": "Modern, responsive websites",
        "tiers": [
            {
                "name": "Landing Page",
                "price": 500,
                "features": [
                    "Single page design",
                    "Mobile responsive",
                    "Contact form",
                    "SEO basics",
                    "Social media links",
                    "Fast loading",
                ],
                "timeline": "3-5 days",
            },
            {
                "name": "Business Website",
                "price": 1500,
                "features": [
                    "5-10 pages",
                    "Custom design",
                    "CMS integration",
                    "Blog functionality",
                    "SEO optimization",
                    "Analytics setup",
                    "Contact forms",
                    "Gallery/Portfolio",
                ],
                "timeline": "2-3 weeks",
            },
            {
                "name": "Web Application",
                "price": 3000,
                "features": [
                    "Complex functionality",
                    "User authentication",
                    "Database integration",
                    "API development",
                    "Admin panel",
                    "Real-time features",
                    "Advanced security",
                ],
                "timeline": "4-6 weeks",
            },
        ],
    },
    {
        "id": "api",
        "name": "API Development",
        "category": "Backend",
        "description": "RESTful APIs and backend services",
        "tiers": [
            {
                "name": "Basic API",
                "price": 1000,
                "features": [
                    "Up to 10 endpoints",
                    "Basic authentication",
                    "CRUD operations",
                    "JSON responses",
                    "Basic documentation",
                    "Error handling",
                ],
                "timeline": "1-2 weeks",
            },
            {
                "name": "Standard API",
                "price": 2500,
                "features": [
                    "Unlimited endpoints",
                    "JWT authentication",
                    "Role-based access",
                    "Rate limiting",
                    "Webhooks",
                    "Detailed documentation",
                    "Testing suite",
                    "Monitoring setup",
                ],
                "timeline": "3-4 weeks",
            },
            {
                "name": "Enterprise API",
                "price": 5000,
                "features": [
                    "Microservices architecture",
                    "GraphQL support",
                    "Advanced security",
                    "Load balancing",
                    "Caching layer",
                    "CI/CD pipeline",
                    "Performance optimization",
                    "SLA guarantee",
                ],
                "timeline": "6-8 weeks",
            },
        ],
    },
    {
        "id": "custom",
        "name": "Custom Software",
        "category": "Custom",
        "description": "Tailored solutions for unique requirements",
        "tiers": [
            {
                "name": "Consultation",
                "price": 100,
                "features": [
                    "1-hour consultation",
                    "Requirements analysis",
                    "Technology recommendations",
                    "Project roadmap",
                    "Cost estimation",
                ],
                "timeline": "Immediate",
            },
            {
                "name": "Small Project",
                "price": 2000,
                "features": [
                    "Custom solution",
                    "Up to 100 hours",
                    "Full documentation",
                    "Testing included",
                    "30-day support",
                ],
                "timeline": "2-4 weeks",
            },
            {
                "name": "Large Project",
                "price": 10000,
                "features": [
                    "Complex solution",
                    "Unlimited scope",
                    "Dedicated team",
                    "Agile development",
                    "Regular updates",
                    "90-day support",
                    "Training included",
                ],
                "timeline": "2-6 months",
            },
        ],
    },
]

_BUNDLES: list[dict[str, Any]] = [
    {
        "name": "Startup Package",
        "description": "Everything you need to launch online",
        "services": [
            {"service_id": "website", "tier_index": 1},
            {"service_id": "discord_bot", "tier_index": 0},
        ],
        "original_price": 1800,
        "bundle_price": 1440,
        "savings": 360,
    },
    {
        "name": "E-Commerce Complete",
        "description": "Full online business solution",
        "services": [
            {"service_id": "webshop", "tier_index": 1},
            {"service_id": "discord_bot", "tier_index": 1},
            {"service_id": "api", "tier_index": 0},
        ],
        "original_price": 5300,
        "bundle_price": 4240,
        "savings": 1060,
    },
    {
        "name": "Developer Special",
        "description": "Backend and automation tools",
        "services": [
            {"service_id": "api", "tier_index": 1},
            {"service_id": "discord_bot", "tier_index": 2},
        ],
        "original_price": 4000,
        "bundle_price": 3200,
        "savings": 800,
    },
]

CARD_COLOR = 0x5865F2
CARD_FOOTER = "Use /order to start your project"


class ServiceCatalog:
    """Read-only lookup over the offered services."""

    def __init__(self, entries: list[ServiceCatalogEntry] | None = None):
        if entries is None:
            entries = [ServiceCatalogEntry(**raw) for raw in _SERVICES]
        self._entries: dict[str, ServiceCatalogEntry] = {e.id: e for e in entries}

    def list_services(self) -> list[ServiceCatalogEntry]:
        return list(self._entries.values())

    def get_service(self, service_id: str) -> ServiceCatalogEntry | None:
        return self._entries.get(service_id)

    def get_tier(self, service_id: str, tier_index: int = 0) -> Tier | None:
        """Return the addressed tier, or None if the service or index is invalid."""
        entry = self.get_service(service_id)
        if entry is None:
            return None
        if tier_index < 0 or tier_index >= len(entry.tiers):
            return None
        return entry.tiers[tier_index]

    def popular_bundles(self) -> list[ServiceBundle]:
        return [
            ServiceBundle(
                name=raw["name"],
                description=raw["description"],
                services=[Selection(**s) for s in raw["services"]],
                original_price=raw["original_price"],
                bundle_price=raw["bundle_price"],
                savings=raw["savings"],
            )
            for raw in _BUNDLES
        ]

    def render_service(self, service_id: str, tier_index: int | None = None) -> dict[str, Any] | None:
        """
        Build a chat-card payload describing a service.

        With a valid tier_index the card shows that single package in full;
        otherwise every tier is summarized by its first three features.
        Returns None for an unknown service.
        """
        entry = self.get_service(service_id)
        if entry is None:
            return None

        fields: list[dict[str, Any]] = []
        tier = self.get_tier(service_id, tier_index) if tier_index is not None else None

        if tier is not None:
            fields = [
                {"name": "Package", "value": tier.name, "inline": True},
                {"name": "Price", "value": f"${_format_price(tier.price)}", "inline": True},
                {"name": "Timeline", "value": tier.timeline, "inline": True},
                {
                    "name": "Features",
                    "value": "\n".join(f"✓ {f}" for f in tier.features),
                    "inline": False,
                },
            ]
        else:
            for t in entry.tiers:
                highlights = "\n".join(f"• {f}" for f in t.features[:3])
                fields.append({
                    "name": f"{t.name} - ${_format_price(t.price)}",
                    "value": (
                        f"**Timeline:** {t.timeline}\n{highlights}\n"
                        f"*...and {len(t.features) - 3} more features*"
                    ),
                    "inline": False,
                })

        return {
            "color": CARD_COLOR,
            "title": entry.name,
            "description": entry.description,
            "fields": fields,
            "footer": CARD_FOOTER,
        }


def _format_price(price: float) -> str:
    return str(int(price)) if price == int(price) else f"{price:.2f}"
