"""
Keyword Signatures - weighted keyword tables for the query classifiers

Each table maps a category name to an ordered tuple of (keyword, weight)
pairs with weights in [0, 1]. Keywords containing a space are phrases and
match as substrings; all others match on word boundaries.
"""

from typing import Dict, Tuple

Signature = Tuple[str, float]
SignatureTable = Dict[str, Tuple[Signature, ...]]


DOMAIN_SIGNATURES: SignatureTable = {
    "color": (
        ("color palette", 1.0),
        ("color scheme", 1.0),
        ("hex code", 0.95),
        ("palette", 0.9),
        ("color", 0.7),
        ("hex", 0.6),
        ("rgb", 0.5),
        ("#", 0.3),
    ),
    "chart": (
        ("chart type", 1.0),
        ("data visualization", 1.0),
        ("visualization", 0.9),
        ("chart", 0.85),
        ("graph", 0.8),
        ("pie chart", 0.95),
        ("bar chart", 0.95),
        ("scatter plot", 0.95),
        ("heatmap", 0.9),
        ("funnel", 0.7),
        ("trend", 0.5),
        ("bar", 0.4),
        ("pie", 0.4),
        ("scatter", 0.5),
    ),
    "landing": (
        ("landing page", 1.0),
        ("landing pattern", 1.0),
        ("hero section", 0.95),
        ("cta button", 0.9),
        ("conversion", 0.8),
        ("landing", 0.75),
        ("hero", 0.7),
        ("testimonial", 0.7),
        ("pricing section", 0.8),
        ("cta", 0.6),
        ("section", 0.3),
    ),
    "product": (
        ("product type", 1.0),
        ("saas design", 1.0),
        ("ecommerce design", 1.0),
        ("fintech", 0.9),
        ("healthcare", 0.85),
        ("saas", 0.8),
        ("ecommerce", 0.8),
        ("e-commerce", 0.8),
        ("gaming", 0.7),
        ("portfolio", 0.6),
        ("crypto", 0.7),
        ("dashboard", 0.6),
    ),
    "prompt": (
        ("ai prompt", 1.0),
        ("prompt template", 1.0),
        ("css snippet", 0.9),
        ("implementation checklist", 0.9),
        ("design system variable", 0.85),
        ("prompt", 0.7),
        ("checklist", 0.5),
        ("variable", 0.3),
    ),
    "style": (
        ("ui style", 1.0),
        ("design style", 1.0),
        ("glassmorphism", 0.95),
        ("neumorphism", 0.95),
        ("brutalism", 0.95),
        ("minimalism", 0.9),
        ("dark mode", 0.85),
        ("flat design", 0.9),
        ("aurora", 0.7),
        ("style", 0.5),
        ("design", 0.3),
        ("ui", 0.3),
    ),
    "ux": (
        ("ux guideline", 1.0),
        ("ux best practice", 1.0),
        ("usability", 0.9),
        ("accessibility", 0.9),
        ("wcag", 0.95),
        ("a11y", 0.9),
        ("ux", 0.75),
        ("user experience", 0.85),
        ("touch target", 0.8),
        ("scroll", 0.4),
        ("animation", 0.4),
        ("keyboard", 0.5),
        ("navigation", 0.4),
        ("mobile", 0.3),
    ),
    "typography": (
        ("font pairing", 1.0),
        ("typography", 0.9),
        ("google fonts", 0.85),
        ("font family", 0.85),
        ("heading font", 0.9),
        ("body font", 0.9),
        ("font", 0.6),
        ("serif", 0.5),
        ("sans-serif", 0.5),
        ("sans", 0.4),
        ("heading", 0.3),
    ),
    "icons": (
        ("lucide icon", 1.0),
        ("icon search", 1.0),
        ("lucide", 0.95),
        ("heroicons", 0.9),
        ("svg icon", 0.9),
        ("icons", 0.8),
        ("icon", 0.7),
        ("symbol", 0.4),
        ("glyph", 0.5),
        ("pictogram", 0.6),
    ),
    "platform": (
        ("human interface guidelines", 1.0),
        ("platform guideline", 1.0),
        ("material design", 0.95),
        ("material you", 0.9),
        ("jetpack compose", 0.85),
        ("sf symbols", 0.85),
        ("hig", 0.9),
        ("cupertino", 0.8),
        ("ios", 0.8),
        ("android", 0.8),
        ("iphone", 0.7),
        ("ipad", 0.7),
        ("platform", 0.5),
    ),
}

# Unified-index document type holding each domain's records
DOMAIN_DOCUMENT_TYPES: Dict[str, str] = {
    "color": "color",
    "chart": "chart",
    "landing": "landing",
    "product": "product",
    "prompt": "prompt",
    "style": "style",
    "ux": "ux-guideline",
    "typography": "typography",
    "icons": "icon",
    "platform": "platform",
}


STACK_SIGNATURES: SignatureTable = {
    "react": (
        ("react hooks", 1.0),
        ("usestate", 0.95),
        ("useeffect", 0.95),
        ("usememo", 0.95),
        ("usecallback", 0.95),
        ("useref", 0.95),
        ("usecontext", 0.95),
        ("jsx", 0.85),
        ("react component", 0.9),
        ("react", 0.7),
    ),
    "nextjs": (
        ("next.js", 1.0),
        ("nextjs", 1.0),
        ("app router", 0.95),
        ("server components", 0.95),
        ("server actions", 0.95),
        ("getserversideprops", 0.95),
        ("getstaticprops", 0.95),
        ("pages router", 0.9),
        ("next/image", 0.9),
        ("next/link", 0.9),
    ),
    "vue": (
        ("vue 3", 1.0),
        ("vuejs", 1.0),
        ("vue.js", 1.0),
        ("composition api", 0.95),
        ("options api", 0.9),
        ("pinia", 0.95),
        ("vuex", 0.9),
        ("ref(", 0.85),
        ("reactive(", 0.85),
        ("vue", 0.6),
    ),
    "svelte": (
        ("sveltekit", 1.0),
        ("svelte 5", 1.0),
        ("svelte store", 0.95),
        ("$:", 0.7),
        ("svelte", 0.8),
    ),
    "flutter": (
        ("flutter widget", 1.0),
        ("flutter", 0.9),
        ("dart", 0.7),
        ("statefulwidget", 0.95),
        ("statelesswidget", 0.95),
        ("buildcontext", 0.9),
        ("widget", 0.4),
    ),
    "swiftui": (
        ("swiftui", 1.0),
        ("swift ui", 1.0),
        ("ios development", 0.8),
        ("@state", 0.9),
        ("@binding", 0.9),
        ("@observedobject", 0.9),
        ("ios", 0.5),
    ),
    "react-native": (
        ("react native", 1.0),
        ("react-native", 1.0),
        ("expo", 0.85),
        ("expo router", 0.95),
        ("native module", 0.8),
    ),
    "html-tailwind": (
        ("tailwind css", 1.0),
        ("tailwindcss", 1.0),
        ("tailwind", 0.85),
        ("utility css", 0.9),
        ("utility class", 0.8),
        ("utility-first", 0.9),
    ),
    "shadcn": (
        ("shadcn/ui", 1.0),
        ("shadcn", 0.95),
        ("radix ui", 0.85),
        ("radix", 0.7),
    ),
    "nuxtjs": (
        ("nuxt 3", 1.0),
        ("nuxtjs", 1.0),
        ("nuxt.js", 1.0),
        ("nuxt", 0.85),
        ("usefetch", 0.9),
        ("useasyncdata", 0.9),
    ),
    "nuxt-ui": (
        ("nuxt ui", 1.0),
        ("@nuxt/ui", 1.0),
    ),
    "jetpack-compose": (
        ("jetpack compose", 1.0),
        ("composable", 0.9),
        ("kotlin", 0.7),
        ("compose", 0.6),
    ),
}

# Framework stacks with guideline files; lookups outside this list are rejected
AVAILABLE_STACKS: Tuple[str, ...] = (
    "flutter",
    "html-tailwind",
    "jetpack-compose",
    "nextjs",
    "nuxt-ui",
    "nuxtjs",
    "react-native",
    "react",
    "shadcn",
    "svelte",
    "swiftui",
    "vue",
)

AVAILABLE_PLATFORMS: Tuple[str, ...] = ("ios", "android")


PLATFORM_SIGNATURES: SignatureTable = {
    "web": (
        ("web app", 0.9),
        ("web page", 0.9),
        ("landing page", 0.7),
        ("website", 0.85),
        ("browser", 0.8),
        ("web", 0.7),
        ("html", 0.7),
        ("responsive", 0.6),
        ("desktop", 0.6),
        ("tailwind", 0.6),
        ("css", 0.5),
    ),
    "mobile-ios": (
        ("ios app", 1.0),
        ("iphone app", 1.0),
        ("human interface guidelines", 1.0),
        ("sf symbols", 0.95),
        ("swiftui", 0.95),
        ("iphone", 0.9),
        ("ipad", 0.9),
        ("ios", 0.9),
        ("cupertino", 0.85),
        ("hig", 0.85),
        ("apple", 0.6),
    ),
    "mobile-android": (
        ("android app", 1.0),
        ("material you", 0.95),
        ("jetpack compose", 0.95),
        ("material design", 0.9),
        ("material 3", 0.9),
        ("android", 0.9),
        ("kotlin", 0.8),
        ("m3", 0.8),
        ("material", 0.6),
    ),
    "mobile-generic": (
        ("mobile app", 0.9),
        ("native app", 0.85),
        ("smartphone", 0.8),
        ("mobile", 0.7),
        ("tablet", 0.6),
        ("touch", 0.4),
    ),
    "cross-platform": (
        ("ios and android", 1.0),
        ("cross platform", 1.0),
        ("cross-platform", 1.0),
        ("multi-platform", 0.9),
        ("both platforms", 0.9),
        ("react native", 0.95),
        ("react-native", 0.95),
        ("flutter", 0.95),
        ("expo", 0.8),
        ("dart", 0.7),
    ),
}

PLATFORM_DEFAULT_FRAMEWORKS: Dict[str, str] = {
    "web": "html-tailwind",
    "mobile-ios": "swiftui",
    "mobile-android": "jetpack-compose",
    "mobile-generic": "react-native",
    "cross-platform": "react-native",
}

# Stacks that can target each platform; a detected stack outside the set is ignored
PLATFORM_STACKS: Dict[str, Tuple[str, ...]] = {
    "web": ("react", "nextjs", "vue", "svelte", "html-tailwind", "shadcn", "nuxtjs", "nuxt-ui"),
    "mobile-ios": ("swiftui", "flutter", "react-native"),
    "mobile-android": ("jetpack-compose", "flutter", "react-native"),
    "mobile-generic": ("flutter", "react-native", "swiftui", "jetpack-compose"),
    "cross-platform": ("flutter", "react-native"),
}

# Platform_Support tag each detected platform counts as a match for
PLATFORM_SUPPORT_TAGS: Dict[str, str] = {
    "web": "web",
    "mobile-ios": "mobile",
    "mobile-android": "mobile",
    "mobile-generic": "mobile",
}


PAGE_INTENT_SIGNATURES: SignatureTable = {
    "landing": (
        ("landing page", 1.0),
        ("hero section", 0.9),
        ("marketing site", 0.9),
        ("marketing page", 0.9),
        ("sales page", 0.85),
        ("home page", 0.8),
        ("landing", 0.9),
        ("homepage", 0.8),
        ("hero", 0.7),
        ("website", 0.6),
        ("cta", 0.6),
        ("signup", 0.5),
        ("pricing", 0.5),
    ),
    "dashboard": (
        ("admin dashboard", 1.0),
        ("admin panel", 1.0),
        ("analytics dashboard", 1.0),
        ("control panel", 0.9),
        ("data table", 0.7),
        ("dashboard", 0.95),
        ("backoffice", 0.8),
        ("admin", 0.85),
        ("kpi", 0.75),
        ("analytics", 0.75),
        ("metrics", 0.7),
        ("crm", 0.7),
        ("panel", 0.6),
    ),
    "page": (
        ("settings page", 0.8),
        ("profile page", 0.8),
        ("about page", 0.8),
        ("contact page", 0.8),
        ("web page", 0.7),
        ("screen", 0.5),
        ("page", 0.5),
        ("form", 0.4),
    ),
}
