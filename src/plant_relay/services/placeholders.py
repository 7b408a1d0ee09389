"""Fixed demo records served when real identification is unavailable."""

from plant_relay.domain.identification import IdentificationResult

PLACEHOLDER_NOTE = "Demo data (PlantNet API is unavailable)"

PLACEHOLDER_RECORDS: tuple[IdentificationResult, ...] = (
    IdentificationResult(
        name="Green plant",
        scientific_name="Plantus Greenus",
        description=(
            "This plant is widespread in nature. "
            "It purifies the air and produces oxygen."
        ),
        benefits=(
            "The plant purifies the air and releases oxygen. "
            "It improves indoor air quality."
        ),
        warnings=(
            "Some plants can cause allergies. Keep out of reach of children."
        ),
        confidence=0.85,
        image_url="",
    ),
    IdentificationResult(
        name="Common dandelion",
        scientific_name="Taraxacum officinale",
        description=(
            "A hardy perennial with toothed leaves and bright yellow flower "
            "heads that turn into round seed clocks."
        ),
        benefits=(
            "Leaves and roots are traditionally used in teas and salads. "
            "Flowers are an early source of nectar for pollinators."
        ),
        warnings=(
            "May cause contact dermatitis in sensitive people. "
            "Avoid plants collected near roads or treated lawns."
        ),
        confidence=0.78,
        image_url="",
    ),
    IdentificationResult(
        name="Peppermint",
        scientific_name="Mentha x piperita",
        description=(
            "An aromatic herb with square stems and serrated leaves, "
            "commonly grown in gardens and pots."
        ),
        benefits=(
            "Leaves are used for tea and flavouring. "
            "The scent is refreshing and may ease mild digestive discomfort."
        ),
        warnings=(
            "Peppermint oil is strong and should not be given to small children. "
            "Consult a doctor if you have reflux."
        ),
        confidence=0.81,
        image_url="",
    ),
)


def select_placeholder(size_bytes: int) -> IdentificationResult:
    """Pick a placeholder record from the upload size.

    Uploads of equal length always receive the same record.
    """
    return PLACEHOLDER_RECORDS[size_bytes % len(PLACEHOLDER_RECORDS)]
