"""
Domain registry - which CSV feeds which index and which columns are searchable.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .bm25 import Document


@dataclass(frozen=True)
class DomainSpec:
    """Static description of one design-knowledge domain."""

    name: str
    doc_type: str
    label: str
    filename: str
    fields: Tuple[str, ...]


DOMAIN_SPECS: Tuple[DomainSpec, ...] = (
    DomainSpec(
        name="styles",
        doc_type="style",
        label="Styles",
        filename="styles.csv",
        fields=(
            "Style Category",
            "Type",
            "Keywords",
            "Best For",
            "Do Not Use For",
            "Effects & Animation",
            "Framework Compatibility",
            "Era/Origin",
            "CSS_Code",
            "Motion_Config",
            "Animation_Variants",
        ),
    ),
    DomainSpec(
        name="colors",
        doc_type="color",
        label="Colors",
        filename="colors.csv",
        fields=(
            "Product Type",
            "Keywords",
            "Notes",
            "Tailwind_Config",
            "Glow_Effects",
            "Dark_Mode_Colors",
            "Semantic_Mapping",
            "Data_Viz_Palette",
            "Semantic_Tokens",
        ),
    ),
    DomainSpec(
        name="typography",
        doc_type="typography",
        label="Typography",
        filename="typography.csv",
        fields=(
            "Font Pairing Name",
            "Category",
            "Heading Font",
            "Body Font",
            "Mood/Style Keywords",
            "Best For",
            "Notes",
        ),
    ),
    DomainSpec(
        name="charts",
        doc_type="chart",
        label="Charts",
        filename="charts.csv",
        fields=(
            "Data Type",
            "Keywords",
            "Best Chart Type",
            "Secondary Options",
            "Accessibility Notes",
            "Library Recommendation",
            "ChartJS_Config",
            "Recharts_Config",
            "Data_Schema",
            "Mock_Data_Example",
        ),
    ),
    DomainSpec(
        name="ux-guidelines",
        doc_type="ux-guideline",
        label="UX Guidelines",
        filename="ux-guidelines.csv",
        fields=("Category", "Issue", "Platform", "Description", "Do", "Don't"),
    ),
    DomainSpec(
        name="icons",
        doc_type="icon",
        label="Icons",
        filename="icons.csv",
        fields=("Category", "Icon Name", "Keywords", "Best For", "Style", "Animation_Class"),
    ),
    DomainSpec(
        name="landing",
        doc_type="landing",
        label="Landing",
        filename="landing.csv",
        fields=(
            "Pattern Name",
            "Page_Type",
            "Keywords",
            "Section Order",
            "Primary CTA Placement",
            "Color Strategy",
            "Recommended Effects",
            "Conversion Optimization",
            "Layout_CSS",
            "Responsive_Strategy",
            "Grid_System_Config",
            "Bento_Layout_Map",
        ),
    ),
    DomainSpec(
        name="products",
        doc_type="product",
        label="Products",
        filename="products.csv",
        fields=(
            "Product Type",
            "Keywords",
            "Primary Style Recommendation",
            "Secondary Styles",
            "Key Considerations",
        ),
    ),
    DomainSpec(
        name="prompts",
        doc_type="prompt",
        label="Prompts",
        filename="prompts.csv",
        fields=(
            "Style Category",
            "AI Prompt Keywords (Copy-Paste Ready)",
            "CSS/Technical Keywords",
            "Implementation Checklist",
            "Design System Variables",
        ),
    ),
)

DOMAINS_BY_NAME: Dict[str, DomainSpec] = {spec.name: spec for spec in DOMAIN_SPECS}

STACK_FIELDS: Tuple[str, ...] = (
    "Category",
    "Guideline",
    "Description",
    "Do",
    "Don't",
    "Code Good",
    "Code Bad",
)

PLATFORM_FIELDS: Tuple[str, ...] = (
    "Category",
    "Pattern",
    "Description",
    "Do",
    "Don't",
    "iOS_Value",
    "Android_Value",
    "Flutter_Equiv",
    "RN_Equiv",
)


def record_content(record: Mapping[str, str], fields: Sequence[str]) -> str:
    """Join the non-empty searchable columns of ``record`` with spaces."""
    return " ".join(str(record[f]) for f in fields if record.get(f))


def make_documents(
    records: Sequence[Mapping[str, str]],
    doc_type: str,
    fields: Sequence[str],
    id_prefix: str,
    extra: Optional[Mapping[str, str]] = None,
) -> List[Document]:
    """Project raw records into read-only documents tagged with ``doc_type``."""
    documents = []
    for idx, record in enumerate(records):
        data = {"type": doc_type}
        if extra:
            data.update(extra)
        data.update(record)
        # the type tag is fixed at build time, a column named "type" cannot override it
        data["type"] = doc_type
        documents.append(
            Document(
                id=f"{id_prefix}-{idx}",
                content=record_content(record, fields),
                data=MappingProxyType(data),
            )
        )
    return documents
