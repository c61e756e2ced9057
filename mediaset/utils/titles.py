"""
Nettoyage des intitules commerciaux renvoyes par les bases de codes-barres.

Les intitules UPCitemdb melangent le titre, le support et l'etat du produit
("Akira (Widescreen) [DVD] NEW", "Halo 3 - Xbox 360 Platinum Hits"). Ces
fonctions extraient un titre exploitable pour une recherche par titre, ainsi
que le format et la plateforme quand ils sont mentionnes.
"""

import re
import unicodedata

_VIDEO_FORMATS = r"DVD|Blu-?ray|4K|BD|UHD|Digital|HD"
_GAME_MEDIA = r"Disc|Cartridge|Digital"

_CONDITION_SUFFIX = re.compile(
    r"\s+(NEW|USED|SEALED|MINT|OPENED|UNOPENED|LIKE NEW)\s*$", re.IGNORECASE
)
_VIDEO_FORMAT_IN_PARENS = re.compile(
    rf"\s*\(([^)]*({_VIDEO_FORMATS})[^)]*)\)", re.IGNORECASE
)
_VIDEO_FORMAT_IN_BRACKETS = re.compile(
    rf"\s*\[([^\]]*({_VIDEO_FORMATS})[^\]]*)\]", re.IGNORECASE
)
_PARENS = re.compile(r"\s*\([^)]*\)")
_BRACKETS = re.compile(r"\s*\[[^\]]*\]")
_VIDEO_FORMAT_AFTER_DASH = re.compile(rf"\s*-\s*({_VIDEO_FORMATS}).*$", re.IGNORECASE)
_VIDEO_FORMAT_AT_END = re.compile(rf"\s*({_VIDEO_FORMATS})\s*$", re.IGNORECASE)
_VIDEO_FORMAT_WORD = re.compile(rf"\b({_VIDEO_FORMATS})\b", re.IGNORECASE)
_TRAILING_ARTICLE = re.compile(r"^(.+?)\s+(A|The)$", re.IGNORECASE)
_SPACES = re.compile(r"\s+")

_EDITION = re.compile(
    r"Deluxe|GOTY|Game of the Year|Definitive|Collector'?s Edition|Complete|Ultimate",
    re.IGNORECASE,
)
_PLATFORM_WORDS = re.compile(
    r"\b(PS5|PS4|PlayStation 5|PlayStation 4|PlayStation|Xbox Series X\|S|Xbox Series X"
    r"|Xbox One|Xbox 360|Xbox|Nintendo Switch|Switch|Wii U|Wii|3DS|DS)\b",
    re.IGNORECASE,
)
_GAME_MEDIA_IN_PARENS = re.compile(rf"\s*\([^)]*({_GAME_MEDIA})[^)]*\)", re.IGNORECASE)
_GAME_MEDIA_IN_BRACKETS = re.compile(rf"\s*\[[^\]]*({_GAME_MEDIA})[^\]]*\]", re.IGNORECASE)
_GAME_MEDIA_AFTER_DASH = re.compile(rf"\s*-\s*({_GAME_MEDIA}).*$", re.IGNORECASE)
_RELEASE_SUFFIX = re.compile(
    r"\s*-\s*(Pre-Played|Pre-Owned|Used|Greatest Hits|Platinum Hits|Player's Choice"
    r"|Nintendo Selects|Essentials).*$",
    re.IGNORECASE,
)
_TRAILING_DASH = re.compile(r"\s*-\s*$")
_SKU = re.compile(r"\b[A-Z0-9]{3,}-[A-Z0-9]{2,}\b")

# Ordre significatif : les motifs les plus specifiques d'abord
PLATFORM_HINTS: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"PS5|PlayStation 5", re.IGNORECASE), "PlayStation 5"),
    (re.compile(r"PS4|PlayStation 4", re.IGNORECASE), "PlayStation 4"),
    (re.compile(r"Xbox Series X\|S|Series X", re.IGNORECASE), "Xbox Series X|S"),
    (re.compile(r"Xbox One", re.IGNORECASE), "Xbox One"),
    (re.compile(r"Xbox 360", re.IGNORECASE), "Xbox 360"),
    (re.compile(r"Nintendo Switch|Switch", re.IGNORECASE), "Nintendo Switch"),
    (re.compile(r"Wii U", re.IGNORECASE), "Wii U"),
    (re.compile(r"Wii", re.IGNORECASE), "Wii"),
    (re.compile(r"\b3DS\b", re.IGNORECASE), "Nintendo 3DS"),
    (re.compile(r"\bN?DS\b", re.IGNORECASE), "Nintendo DS"),
)


def strip_invisible_chars(text: str) -> str:
    """Retire les caracteres de controle et de format (BOM, LRM...)."""
    return "".join(
        char for char in text if unicodedata.category(char) not in ("Cf", "Cc")
    )


def collapse_spaces(text: str) -> str:
    """Reduit les suites d'espaces a un seul espace et nettoie les bords."""
    return _SPACES.sub(" ", text).strip()


def clean_movie_title(raw_title: str) -> str:
    """
    Extrait le titre d'un film depuis un intitule commercial.

    Examples:
        "1408 (Two-Disc Collector's Edition)" -> "1408"
        "The Matrix (DVD)" -> "The Matrix"
        "Akira (Widescreen) [DVD] NEW" -> "Akira"
        "Scanner Darkly A" -> "A Scanner Darkly"
    """
    title = strip_invisible_chars(raw_title or "").strip()
    if not title:
        return ""

    # Stabilise : certains intitules empilent plusieurs motifs
    while True:
        previous = title
        title = _CONDITION_SUFFIX.sub("", title)
        title = _VIDEO_FORMAT_IN_PARENS.sub("", title)
        title = _VIDEO_FORMAT_IN_BRACKETS.sub("", title)
        title = _PARENS.sub("", title)
        title = _BRACKETS.sub("", title)
        title = _VIDEO_FORMAT_AFTER_DASH.sub("", title)
        title = _VIDEO_FORMAT_AT_END.sub("", title)
        title = collapse_spaces(title)
        if title == previous:
            break

    # Article deplace en fin de titre par certains catalogues
    match = _TRAILING_ARTICLE.match(title)
    if match:
        title = f"{match.group(2)} {match.group(1).strip()}"
    return title


def extract_movie_format(raw_title: str) -> str:
    """
    Extrait le support (DVD, Blu-ray, 4K UHD...) d'un intitule commercial.

    Examples:
        "The Matrix (Blu-ray)" -> "Blu-ray"
        "Akira [4K UHD]" -> "4K UHD"
        "1408 (Two-Disc Collector's Edition)" -> ""
    """
    if not raw_title or not raw_title.strip():
        return ""

    candidates = []
    paren = re.search(rf"\((.*?({_VIDEO_FORMATS}).*?)\)", raw_title, re.IGNORECASE)
    if paren:
        candidates.append(paren.group(1).strip())
    bracket = re.search(rf"\[(.*?({_VIDEO_FORMATS}).*?)\]", raw_title, re.IGNORECASE)
    if bracket:
        candidates.append(bracket.group(1).strip())
    dash = re.search(rf"-\s*({_VIDEO_FORMATS}).*$", raw_title, re.IGNORECASE)
    if dash:
        candidates.append(dash.group(0).lstrip("-").strip())
    end = re.search(rf"\b({_VIDEO_FORMATS})\b\s*$", raw_title, re.IGNORECASE)
    if end:
        candidates.append(end.group(1).strip())

    if not candidates:
        return ""

    found = candidates[0]
    found = re.sub(r"\bBlu-?ray\b", "Blu-ray", found, flags=re.IGNORECASE)
    found = re.sub(r"\bBD\b", "Blu-ray", found, flags=re.IGNORECASE)
    found = re.sub(r"\bUHD\b", "4K UHD", found, flags=re.IGNORECASE)
    # "4K UHD" d'origine devient "4K 4K UHD" apres normalisation
    found = re.sub(r"\b4K\s+4K UHD\b", "4K UHD", found, flags=re.IGNORECASE)
    return found


def contains_video_format(text: str) -> bool:
    """Verifie si un texte mentionne un support video."""
    return bool(_VIDEO_FORMAT_WORD.search(text or ""))


def clean_game_title(raw_title: str) -> tuple[str, str]:
    """
    Extrait le titre d'un jeu et son edition depuis un intitule commercial.

    Returns:
        Tuple (titre nettoye, edition). L'edition vaut "" si aucune.

    Examples:
        "Halo 3 - Xbox 360" -> ("Halo 3", "")
        "Skyrim Legendary Edition PS4" -> ("Skyrim Legendary Edition", "")
        "Fallout 4 GOTY - PS4" -> ("Fallout 4", "GOTY")
    """
    title = strip_invisible_chars(raw_title or "").strip()
    if not title:
        return "", ""

    edition_match = _EDITION.search(title)
    edition = edition_match.group(0) if edition_match else ""

    title = _PLATFORM_WORDS.sub("", title)
    title = _GAME_MEDIA_IN_PARENS.sub("", title)
    title = _GAME_MEDIA_IN_BRACKETS.sub("", title)
    title = _GAME_MEDIA_AFTER_DASH.sub("", title)
    title = _RELEASE_SUFFIX.sub("", title)
    title = _TRAILING_DASH.sub("", title)
    title = _SKU.sub("", title)
    if edition:
        escaped = re.escape(edition)
        title = re.sub(rf"{escaped}\s*Edition", "", title, flags=re.IGNORECASE)
        title = re.sub(escaped, "", title, flags=re.IGNORECASE)
    title = _PARENS.sub("", title)
    title = _BRACKETS.sub("", title)
    title = _TRAILING_DASH.sub("", collapse_spaces(title))
    return collapse_spaces(title), edition


def extract_game_format(raw_title: str) -> str:
    """Support physique d'un jeu : "Cartridge", "Disc", "Digital" ou ""."""
    if not raw_title:
        return ""
    if re.search(r"Cartridge", raw_title, re.IGNORECASE):
        return "Cartridge"
    if re.search(r"Disc|Blu-?ray|DVD", raw_title, re.IGNORECASE):
        return "Disc"
    if re.search(r"Digital", raw_title, re.IGNORECASE):
        return "Digital"
    return ""


def extract_platform(title: str, *hints: str) -> str:
    """
    Detecte la plateforme depuis l'intitule, puis depuis les autres indices
    (categorie, marque, modele).
    """
    for text in (title or "", " ".join(hint for hint in hints if hint)):
        for pattern, platform in PLATFORM_HINTS:
            if pattern.search(text):
                return platform
    return ""


def derive_format_from_platforms(platforms: list[str], detected_platform: str) -> str:
    """
    Deduit le support physique typique a partir des plateformes d'un jeu.

    La plateforme detectee sur le code-barres est privilegiee ; a defaut,
    la premiere plateforme de la liste est utilisee.
    """
    if not platforms:
        return ""

    detected = detected_platform.lower()
    chosen = platforms[0]
    if detected:
        for name in platforms:
            lowered = name.lower()
            if detected in lowered or lowered in detected:
                chosen = name
                break

    name = chosen.lower()
    if "dreamcast" in name:
        return "GD-ROM"
    cartridge = ("switch", "3ds", "ds", "game boy", "gameboy", "n64", "nes", "genesis", "game gear")
    if any(token in name for token in cartridge):
        return "Cartridge"
    blu_ray = ("playstation 5", "ps5", "playstation 4", "ps4", "xbox series", "xbox one")
    if any(token in name for token in blu_ray):
        return "Blu-ray Disc"
    dvd = ("playstation 3", "ps3", "playstation 2", "ps2", "xbox", "wii")
    if any(token in name for token in dvd):
        return "DVD"
    if "playstation" in name or "saturn" in name or "sega cd" in name:
        return "CD-ROM"
    if "eshop" in name or "digital" in name or "download" in name:
        return "Digital"
    if any(token in name for token in ("pc", "windows", "mac", "linux")):
        return "CD-ROM"
    return "DVD"
