"""
Tests: service catalog lookups and card rendering.

Run with:
    pytest comcraft/tests/test_catalog.py -v
"""

from comcraft.catalog.service_catalog import CARD_FOOTER


class TestLookups:
    def test_builtin_services(self, catalog):
        ids = [s.id for s in catalog.list_services()]
        assert ids == ["webshop", "discord_bot", "website", "api", "custom"]
        assert all(len(s.tiers) == 3 for s in catalog.list_services())

    def test_tier_zero_is_cheapest(self, catalog):
        for entry in catalog.list_services():
            assert entry.tiers[0].price == min(t.price for t in entry.tiers)

    def test_unknown_service(self, catalog):
        assert catalog.get_service("nope") is None
        assert catalog.get_tier("nope", 0) is None

    def test_get_tier_bounds(self, catalog):
        assert catalog.get_tier("api", 2).name == "Enterprise API"
        assert catalog.get_tier("api", 3) is None
        assert catalog.get_tier("api", -1) is None

    def test_three_popular_bundles(self, catalog):
        names = [b.name for b in catalog.popular_bundles()]
        assert names == ["Startup Package", "E-Commerce Complete", "Developer Special"]


class TestRenderService:
    def test_unknown_service_renders_nothing(self, catalog):
        assert catalog.render_service("nope") is None

    def test_single_tier_card(self, catalog):
        card = catalog.render_service("discord_bot", 1)
        assert card["title"] == "Discord Bot Development"
        assert card["footer"] == CARD_FOOTER
        fields = {f["name"]: f["value"] for f in card["fields"]}
        assert fields["Package"] == "Advanced Bot"
        assert fields["Price"] == "$800"
        assert fields["Timeline"] == "2-3 weeks"
        assert fields["Features"].splitlines()[0] == "✓ Unlimited commands"

    def test_overview_card_lists_every_tier(self, catalog):
        card = catalog.render_service("webshop")
        assert [f["name"] for f in card["fields"]] == [
            "Starter Shop - $1500",
            "Professional Shop - $3500",
            "Enterprise Shop - $7500",
        ]
        assert "*...and 4 more features*" in card["fields"][0]["value"]
        assert "• Up to 100 products" in card["fields"][0]["value"]

    def test_invalid_tier_falls_back_to_overview(self, catalog):
        card = catalog.render_service("website", 9)
        assert len(card["fields"]) == 3
