"""Hatch catalog for Northeast and Southern Appalachian trout streams.

Temperatures are emergence triggers in water temperature (°F), compiled from
regional hatch charts and fly shop reports.
"""

from __future__ import annotations

from hatchcast.schemas import EventDefinition, InsectOrder, TimeOfDay

HATCHES: tuple[EventDefinition, ...] = (
    # -------------------------------------------------------------------------
    # Mayflies (Ephemeroptera)
    # -------------------------------------------------------------------------
    EventDefinition(
        id="hendrickson",
        common_name="Hendrickson",
        scientific_name="Ephemerella subvaria",
        order=InsectOrder.MAYFLY,
        min_temp_f=50,
        max_temp_f=58,
        peak_months=(4, 5),
        time_of_day=TimeOfDay.AFTERNOON,
        prefers_overcast=True,
        hook_sizes=(12, 14),
        notes="Start of dry fly season. Males (Red Quills) darker, females tan/yellow.",
    ),
    EventDefinition(
        id="bwo",
        common_name="Blue Winged Olive",
        scientific_name="Baetis spp.",
        order=InsectOrder.MAYFLY,
        min_temp_f=46,
        max_temp_f=56,
        peak_months=(3, 4, 5, 9, 10, 11),
        time_of_day=TimeOfDay.ANY,
        prefers_overcast=True,
        hook_sizes=(16, 18, 20),
        notes="Best on overcast, drizzly days. Spring and fall as temps pass through range.",
    ),
    EventDefinition(
        id="march-brown",
        common_name="March Brown",
        scientific_name="Maccaffertium vicarium",
        order=InsectOrder.MAYFLY,
        min_temp_f=54,
        max_temp_f=62,
        peak_months=(5, 6),
        time_of_day=TimeOfDay.MIDDAY,
        hook_sizes=(10, 12),
        notes="Hatches in May despite the name. Steady trickle rather than a blanket hatch.",
    ),
    EventDefinition(
        id="sulphur-big",
        common_name="Big Sulphur",
        scientific_name="Ephemerella invaria",
        order=InsectOrder.MAYFLY,
        min_temp_f=56,
        max_temp_f=64,
        peak_months=(5, 6),
        time_of_day=TimeOfDay.EVENING,
        hook_sizes=(14, 16),
        notes="Overlaps with late Hendricksons.",
    ),
    EventDefinition(
        id="sulphur-little",
        common_name="Little Summer Sulphur",
        scientific_name="Ephemerella dorothea",
        order=InsectOrder.MAYFLY,
        min_temp_f=58,
        max_temp_f=68,
        peak_months=(6, 7, 8),
        time_of_day=TimeOfDay.EVENING,
        hook_sizes=(16, 18, 20),
        notes="Dog days hatch. Spooky fish, fine tippet. Best on tailwaters.",
    ),
    EventDefinition(
        id="green-drake",
        common_name="Green Drake",
        scientific_name="Ephemera guttulata",
        order=InsectOrder.MAYFLY,
        min_temp_f=58,
        max_temp_f=66,
        peak_months=(5, 6),
        time_of_day=TimeOfDay.EVENING,
        hook_sizes=(8, 10),
        notes="Iconic large mayfly, often evening into dark.",
    ),
    EventDefinition(
        id="pmd",
        common_name="Pale Morning Dun",
        scientific_name="Ephemerella excrucians",
        order=InsectOrder.MAYFLY,
        min_temp_f=58,
        max_temp_f=66,
        peak_months=(6, 7),
        time_of_day=TimeOfDay.MORNING,
        hook_sizes=(16, 18),
        notes="Peak in July. Can overlap with Yellow Sallies.",
    ),
    EventDefinition(
        id="quill-gordon",
        common_name="Quill Gordon",
        scientific_name="Epeorus pleuralis",
        order=InsectOrder.MAYFLY,
        min_temp_f=48,
        max_temp_f=54,
        peak_months=(4, 5),
        time_of_day=TimeOfDay.AFTERNOON,
        prefers_overcast=True,
        hook_sizes=(12, 14),
        notes="Classic Catskill pattern and one of the earliest hatches.",
    ),
    EventDefinition(
        id="isonychia",
        common_name="Isonychia / Slate Drake",
        scientific_name="Isonychia bicolor",
        order=InsectOrder.MAYFLY,
        min_temp_f=60,
        max_temp_f=70,
        peak_months=(6, 7, 8, 9),
        time_of_day=TimeOfDay.EVENING,
        hook_sizes=(10, 12),
        notes="Nymphs swim to shore to emerge. Good streamer target too.",
    ),
    # -------------------------------------------------------------------------
    # Caddisflies (Trichoptera)
    # -------------------------------------------------------------------------
    EventDefinition(
        id="caddis-tan",
        common_name="Tan Caddis",
        scientific_name="Hydropsyche spp.",
        order=InsectOrder.CADDISFLY,
        min_temp_f=54,
        max_temp_f=70,
        peak_months=(4, 5, 6, 7, 8, 9),
        time_of_day=TimeOfDay.EVENING,
        hook_sizes=(14, 16),
        notes="Most common caddis. Skitters on the surface.",
    ),
    EventDefinition(
        id="caddis-olive",
        common_name="Olive Caddis",
        scientific_name="Rhyacophila spp.",
        order=InsectOrder.CADDISFLY,
        min_temp_f=50,
        max_temp_f=65,
        peak_months=(4, 5, 6),
        time_of_day=TimeOfDay.AFTERNOON,
        hook_sizes=(14, 16),
        notes="Free-living caddis. Green rock worm larvae.",
    ),
    EventDefinition(
        id="grannom",
        common_name="Grannom / Apple Caddis",
        scientific_name="Brachycentrus spp.",
        order=InsectOrder.CADDISFLY,
        min_temp_f=48,
        max_temp_f=58,
        peak_months=(4, 5),
        time_of_day=TimeOfDay.AFTERNOON,
        hook_sizes=(14, 16),
        notes="Early season. Females carry green egg sacs.",
    ),
    EventDefinition(
        id="october-caddis",
        common_name="October Caddis",
        scientific_name="Dicosmoecus spp.",
        order=InsectOrder.CADDISFLY,
        min_temp_f=45,
        max_temp_f=55,
        peak_months=(9, 10, 11),
        time_of_day=TimeOfDay.AFTERNOON,
        hook_sizes=(6, 8, 10),
        notes="Large orange fall caddis.",
    ),
    # -------------------------------------------------------------------------
    # Stoneflies (Plecoptera)
    # -------------------------------------------------------------------------
    EventDefinition(
        id="yellow-sally",
        common_name="Yellow Sally",
        scientific_name="Isoperla spp.",
        order=InsectOrder.STONEFLY,
        min_temp_f=56,
        max_temp_f=68,
        peak_months=(5, 6, 7),
        time_of_day=TimeOfDay.MORNING,
        hook_sizes=(14, 16),
        notes="Small yellow stonefly. Can overlap with PMDs.",
    ),
    EventDefinition(
        id="early-brown-stone",
        common_name="Early Brown Stonefly",
        scientific_name="Strophopteryx fasciata",
        order=InsectOrder.STONEFLY,
        min_temp_f=40,
        max_temp_f=50,
        peak_months=(3, 4),
        time_of_day=TimeOfDay.AFTERNOON,
        hook_sizes=(12, 14),
        notes="Very early season. Fish the nymph near banks.",
    ),
    EventDefinition(
        id="golden-stone",
        common_name="Golden Stonefly",
        scientific_name="Perlidae spp.",
        order=InsectOrder.STONEFLY,
        min_temp_f=55,
        max_temp_f=65,
        peak_months=(5, 6),
        time_of_day=TimeOfDay.ANY,
        hook_sizes=(8, 10),
        notes="Crawls to shore to emerge. Good dry fly fishing.",
    ),
    # -------------------------------------------------------------------------
    # Midges (Diptera)
    # -------------------------------------------------------------------------
    EventDefinition(
        id="midge",
        common_name="Midge",
        scientific_name="Chironomidae",
        order=InsectOrder.MIDGE,
        min_temp_f=35,
        max_temp_f=70,
        peak_months=tuple(range(1, 13)),
        time_of_day=TimeOfDay.ANY,
        hook_sizes=(18, 20, 22, 24),
        notes="Year-round. Primary food source when nothing else hatches.",
    ),
)


def hatches_by_month(month: int) -> list[EventDefinition]:
    """Hatches whose peak season includes ``month`` (1-12)."""
    return [h for h in HATCHES if month in h.peak_months]


def hatches_by_temp(temp_f: float) -> list[EventDefinition]:
    """Hatches whose emergence range includes ``temp_f``."""
    return [h for h in HATCHES if h.min_temp_f <= temp_f <= h.max_temp_f]


def hatches_by_order(order: InsectOrder) -> list[EventDefinition]:
    """Hatches of one insect order."""
    return [h for h in HATCHES if h.order == order]


def get_hatch(hatch_id: str) -> EventDefinition | None:
    """Look up a hatch by id."""
    return next((h for h in HATCHES if h.id == hatch_id), None)
