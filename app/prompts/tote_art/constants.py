# Art direction for tote prints.
# Edit text here to change the look without touching the prompt logic.

DEFAULT_COUNTRY = "turkey"
DEFAULT_THEME = "peaceful"
DEFAULT_TIME_OF_DAY = "daytime"

PREAMBLE_LINES = [
    "high-quality hand-crafted illustration for a tote print",
    "Islamic architecture and ornament",
]

# Country -> material palette and pre-modern craft cues
COUNTRY_MOTIFS = {
    "morocco": "Fez zellij in earth tones, hand-cut geometric tiles, tadelakt lime plaster, carved cedar mashrabiyya, brass lanterns with candlelight, terracotta planters, turquoise accents, narrow riad courtyard proportions, pre-1950 craftsmanship, no glass panels, no LEDs",
    "egypt": "Fatimid and Mamluk arches, stone muqarnas, mashrabiyya screens, Nile palm fronds, warm limestone and sandstone, turquoise inlays, late-afternoon amber light, historic Cairo courtyard character, pre-modern craft, no chrome, no neon",
    "turkey": "Ottoman arcades and domes, Iznik tilework in cobalt and turquoise, tulip and cintamani motifs, stone fountain, aged walnut doors, moonlit courtyard reflections, artisan glaze irregularities",
    "iran": "Safavid iwans, intricate girih patterns, haft-rangi tiles, turquoise and lapis domes, chahar bagh water rills, Persian garden cypress silhouettes, soft dawn light, traditional kiln glaze",
    "pakistan": "Mughal red sandstone and white marble inlay, charbagh channels, pietra dura floral medallions, jali screens, Kashmiri papier-mache floral accents, hand-painted look, warm dusk",
    "saudi": "Hijazi mashrabiya lattice, Najdi carved doors, date palms, coral stone texture, desert courtyard walls, calm night desert blues, oil-lamp warmth, historical materials",
    "uae": "barajeel wind towers, gypsum and coral stone, coastal courtyard planters, pearl-sand palette with teal hints, calm water reflections, pre-oil era craft detailing",
    "jordan": "Levantine stone arches, olive wood accents, desert limestone blocks, wadi canyon tones, sage green and sky blue palette, gentle dusk, hand-carved stone textures",
    "palestine": "old-city hewn stone courtyard, olive tree centerpiece and olive branches worked into the ornament, hand-loom keffiyeh chevron pattern used subtly as geometric border, Mediterranean light, olive-green and sea-blue palette, artisan chisel marks, no modern materials",
    "indonesia": "tropical courtyard with layered roof silhouettes, batik-inspired floral arabesques, teak wood lattice, jade and deep blue with gold leaf accents, humid garden air, hand-dyed fabric feel",
}

COUNTRY_ALIASES = {
    "saudi_arabia": "saudi",
    "ksa": "saudi",
    "united_arab_emirates": "uae",
    "emirates": "uae",
    "turkiye": "turkey",
}

# Theme -> mood and visual language
THEME_STYLES = {
    "peaceful": "serene, contemplative atmosphere; balanced composition; gentle ornament; calm, low-contrast palette",
    "islamic": "emphasis on Islamic geometry and architectural craft; arabesques, muqarnas, and abstract calligraphic border flourishes (unreadable)",
    "nature": "garden and landscape emphasis; palms, cypress, water rills, mountains and desert gardens; organic arabesque vines",
    "city_vibrant": "busy historic streets, marketplaces, arcades, layered signage shapes (no text), lively tiling; energetic composition",
    "traditional": "hand-crafted fine-art illustration, museum-grade craft, natural patina, subtle imperfections, paper texture visible",
    "geometric": "hand-set geometric arabesque, interlaced star polygons and tessellation, carved plaster and mosaic patterns, artisan precision not computer-perfect",
    "floral": "illumination motifs inspired by Islamic manuscripts, delicate vines and blossoms as ornament, hand-inked outlines, no legible text",
    "calligraphic": "calligraphic ornament strokes as abstract swashes only, ink on paper look, integrated as pattern, no readable words",
    "minimal": "minimal composition, a single elegant arch or dome silhouette with subtle low-contrast patterning, airy negative space, matte paper",
}

THEME_ALIASES = {
    "city": "city_vibrant",
    "vibrant": "city_vibrant",
    "spiritual": "islamic",
}

# Time of day -> lighting and palette
TIME_OF_DAY_HINTS = {
    "daytime": "daytime scene; soft natural light; gentle shadows; sun-warmed stone and glazed tile; fresh sky tones",
    "nighttime": "night scene; lantern and window glow; moonlit courtyards; deep indigo and teal shadows; warm brass highlights on stone and tile",
}

TIME_OF_DAY_ALIASES = {
    "day": "daytime",
    "night": "nighttime",
}

# Keep three per country so options A/B/C show different scenes
COUNTRY_LANDMARKS = {
    "morocco": [
        "Fez medina courtyard with zellige fountain, cedar doors, and carved plaster arches in warm sunlight",
        "Marrakech Koutoubia Mosque minaret with palm-lined plaza and sunlit adobe tones",
        "Chefchaouen blue-washed alley with ornate doorways, horseshoe arches, and tiled steps",
    ],
    "egypt": [
        "Giza pyramids rising over limestone plateau with desert palms and ancient stone texture",
        "Mosque-Madrasa of Sultan Hassan in Cairo with Mamluk arches, mashrabiya screens, and sandstone",
        "Nile riverside promenade with feluccas and palm silhouettes near Cairo skyline",
    ],
    "turkey": [
        "Blue Mosque domes and arcades with Iznik tile accents",
        "Hagia Sophia exterior buttresses and grand portal stonework",
        "Topkapi Palace courtyard with Ottoman fountain and colonnade",
    ],
    "iran": [
        "Shah Mosque Isfahan iwan with haft-rangi tiles and turquoise dome",
        "Nasir al-Mulk mosque stained-glass patterns cast on carpets",
        "Persepolis terrace reliefs and Achaemenid columns in view",
    ],
    "pakistan": [
        "Badshahi Mosque red sandstone courtyard and white marble inlay",
        "Faisal Mosque Islamabad tent-like silhouette and mountain backdrop",
        "Lahore Fort Sheesh Mahal jali screens and pietra dura motifs",
    ],
    "saudi": [
        "Masjid an-Nabawi courtyard arcades and classical lamps",
        "Diriyah At-Turaif adobe walls and Najdi geometric details",
        "Historic Jeddah Al-Balad coral-stone houses with roshan mashrabiyas",
    ],
    "uae": [
        "Al Fahidi wind towers and coral-stone lanes near the creek",
        "Sheikh Zayed Grand Mosque colonnade with floral marble inlay",
        "Desert caravanserai courtyard with palm shade and water jar",
    ],
    "jordan": [
        "Petra Treasury rock-cut facade and canyon approach",
        "Amman Citadel Umayyad arches with hillscape",
        "Wadi Rum sandstone outcrops and desert camp lights",
    ],
    "palestine": [
        "Jerusalem Old City limestone arches with olive tree courtyard",
        "Dome of the Rock golden dome with blue tile ornament and arcade",
        "Hebron traditional stone market lanes and archways",
    ],
    "indonesia": [
        "Borobudur terraces with stone stupas and relief panels",
        "Prambanan temple spires with volcanic plain",
        "Ubud water temple courtyard with carved stone and lotus pool",
    ],
}

# Used when no known country is selected
GENERIC_THEME_SCENES = {
    "peaceful": [
        "quiet courtyard with small tiled fountain and cypress shadows",
        "shaded arcade with repeating arches and cool stone floor",
        "garden wall with carved plaster medallion and gentle water rill",
    ],
    "islamic": [
        "geometric star tessellation border framing an architectural centerpiece",
        "muqarnas-inspired vault with interlaced arabesque ornament",
        "abstract calligraphic cartouche motifs with tiled spandrels (unreadable)",
    ],
    "nature": [
        "oasis garden with palms, citrus, and mosaic-edged pool",
        "mountain silhouettes beyond a walled garden with narrow water channel",
        "desert flora with date palms and patterned ceramic planters",
    ],
    "city_vibrant": [
        "historic souq arcade with patterned stalls and tiled columns",
        "stone alley with stacked balconies, mashrabiya screens, and lanterns",
        "city courtyard with fountain, colorful ceramic tiles, and busy paving",
    ],
}

# Pushes away from glossy CGI
ERA_MEDIUM_LINES = [
    "era: pre-1950 craftsmanship, historically grounded materials",
    "medium: gouache and ink on textured paper, matte finish",
    "natural ambient light, realistic materials, subtle film-grain texture",
]

BASE_STYLE = "traditional, heritage illustration style; vintage print and handcrafted texture; museum-grade craft feeling; stone, tile, carved plaster; square composition with clean margins"

UNIVERSAL_EXCLUSIONS = [
    "no people, no faces, no hands",
    "no readable text, no letters, no brands or logos",
    "not photorealistic, no CGI or 3d render look",
]

NEGATIVE_PROMPT = ", ".join([
    "people, person, human, figures, face, portrait, crowd",
    "readable text, typography, slogans, watermark, signature, logo, flags",
    "3d render, cgi, plastic, ultra-gloss, HDR bloom, lens flare, neon, cyberpunk, sci-fi, futuristic",
    "oversaturated, over-sharpened, noisy, blurry, warped geometry, uncanny perspective",
    "digital painting look, airbrush sheen, smooth plastic surfaces, chrome, stainless steel",
    "modern glass curtain walls, LED strips, acrylic, plexiglass",
])
