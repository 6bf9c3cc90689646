from dataclasses import dataclass, field


@dataclass
class PriceBreakdown:
    base: int = 0
    additional_hour: int = 0
    addons: list = field(default_factory=list)  # (addon_id, name, unit_price, quantity, subtotal)

    @property
    def total(self) -> int:
        return self.base + self.additional_hour + sum(line[4] for line in self.addons)

    def to_dict(self) -> dict:
        return {
            "base": self.base,
            "additional_hour": self.additional_hour,
            "addons": [
                {"addon_id": a, "name": n, "unit_price": p, "quantity": q, "subtotal": s}
                for a, n, p, q, s in self.addons
            ],
            "total": self.total,
        }


def _catalog_entry(catalog, addon_id):
    entry = catalog.get(addon_id)
    if entry is None:
        return None, None
    if isinstance(entry, int):
        return None, entry
    if isinstance(entry, dict):
        return entry.get("name"), entry.get("price")
    return getattr(entry, "name", None), entry.price


def price_breakdown(duration_hours, additional_hour, extra_hour_price, pricing_tiers, selected_addons, addon_catalog) -> PriceBreakdown:
    """
    Itemized price of a booking, all amounts in the smallest currency unit.

    pricing_tiers maps duration_hours -> price. A duration with no tier
    contributes 0 here; callers that accept user input must reject unknown
    durations before quoting. addon_catalog maps addon id -> Addon row, a
    {"name", "price"} dict or a bare int price. Selected add-ons missing
    from the catalog are skipped.
    """
    out = PriceBreakdown()
    out.base = int(pricing_tiers.get(duration_hours, 0) or 0)
    if additional_hour:
        out.additional_hour = int(extra_hour_price)

    for addon_id, quantity in (selected_addons or {}).items():
        quantity = int(quantity or 0)
        if quantity <= 0:
            continue
        name, price = _catalog_entry(addon_catalog, addon_id)
        if price is None:
            continue
        out.addons.append((addon_id, name, int(price), quantity, int(price) * quantity))

    return out


def total_price(duration_hours, additional_hour, extra_hour_price, pricing_tiers, selected_addons, addon_catalog) -> int:
    return price_breakdown(
        duration_hours, additional_hour, extra_hour_price, pricing_tiers, selected_addons, addon_catalog
    ).total
