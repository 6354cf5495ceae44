"""
translations.py — English claim → localized claim lookup.

Lookup order: exact key, then case-insensitive key, then the English text
itself. There is no substring or fuzzy matching; a partially-localized layout
renders the untranslated lines in English, which is expected, not an error.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)

SOURCE_LANGUAGE = "English"

Dictionaries = Mapping[str, Mapping[str, str]]

# language → english phrase → localized phrase
TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "Hindi": {
        "Quick onset of action within 5 mins": "5 मिनट में तेज़ असर",
        "Action within 5 mins": "5 मिनट में असर",
        "5 mins": "5 मिनट",
        "12 hrs long lasting relief": "12 घंटे लंबे समय तक राहत",
        "Long lasting relief": "लंबे समय तक राहत",
        "12 hrs": "12 घंटे",
        "Reduces exacerbations by 12%-15%": "तीव्रता को 12%-15% तक कम करता है",
        "Reduces exacerbations": "तीव्रता को कम करता है",
        "12%-15%": "12%-15%",
        "Improves lung function by 120 ml": "फेफड़ों की क्षमता में 120 ml सुधार",
        "Improves lung function": "फेफड़ों की क्षमता में सुधार",
        "120 ml": "120 ml",
        "For the use of a Registered Medical Practitioner or a Hospital or a Laboratory only":
            "केवल पंजीकृत चिकित्सक या अस्पताल या प्रयोगशाला के उपयोग के लिए",
        "COPD patients highly symptomatic and requiring high dose of ICS":
            "अत्यधिक लक्षण वाले सीओपीडी रोगी जिन्हें ICS की उच्च खुराक की आवश्यकता है",
        "Quick onset of action": "तेज़ असर की शुरुआत",
        "action within": "में असर",
        "long lasting": "लंबे समय तक",
        "relief": "राहत",
        "Fast Relief": "तेज़ राहत",
        "Breathe Easy": "आसानी से सांस लें",
        "Exacerbation reduction": "तीव्रता में कमी",
    },
    "Tamil": {
        "Quick onset of action within 5 mins": "5 நிமிடங்களில் விரைவான செயல்",
        "Action within 5 mins": "5 நிமிடங்களில் செயல்",
        "5 mins": "5 நிமிடங்கள்",
        "12 hrs long lasting relief": "12 மணி நேரம் நீடித்த நிவாரணம்",
        "Long lasting relief": "நீடித்த நிவாரணம்",
        "12 hrs": "12 மணி நேரம்",
        "Reduces exacerbations by 12%-15%": "தீவிரத்தை 12%-15% குறைக்கிறது",
        "Reduces exacerbations": "தீவிரத்தை குறைக்கிறது",
        "Improves lung function by 120 ml": "நுரையீரல் செயல்பாட்டை 120 ml மேம்படுத்துகிறது",
        "Improves lung function": "நுரையீரல் செயல்பாட்டை மேம்படுத்துகிறது",
        "For the use of a Registered Medical Practitioner or a Hospital or a Laboratory only":
            "பதிவு செய்யப்பட்ட மருத்துவர் அல்லது மருத்துவமனை அல்லது ஆய்வகத்தின் பயன்பாட்டிற்கு மட்டும்",
        "COPD patients highly symptomatic and requiring high dose of ICS":
            "அதிக அறிகுறிகள் கொண்ட மற்றும் அதிக ICS தேவைப்படும் சிஓபிடி நோயாளிகள்",
        "Fast Relief": "விரைவான நிவாரணம்",
        "Breathe Easy": "எளிதாக சுவாசிக்கவும்",
        "Exacerbation reduction": "தீவிரம் குறைப்பு",
    },
    "English": {},
}


def supported_languages(dictionaries: Optional[Dictionaries] = None) -> List[str]:
    return sorted((dictionaries if dictionaries is not None else TRANSLATIONS).keys())


def lookup(
    text: str,
    language: str,
    dictionaries: Optional[Dictionaries] = None,
) -> str:
    """
    Resolve an English phrase for `language`.

    Args:
        text:         Canonical English phrase.
        language:     Target language name, e.g. "Hindi".
        dictionaries: language → english → localized. Defaults to TRANSLATIONS.

    Returns:
        The exact-key value, else the value of a key equal ignoring case, else
        `text` unchanged.
    """
    found = _find(text, language, dictionaries)
    if found is None:
        if language != SOURCE_LANGUAGE:
            logger.debug(f"No {language} translation for '{text}', keeping English")
        return text
    return found


def _find(text: str, language: str, dictionaries: Optional[Dictionaries]) -> Optional[str]:
    if language == SOURCE_LANGUAGE:
        return None

    table = (dictionaries if dictionaries is not None else TRANSLATIONS).get(language) or {}
    if text in table:
        return table[text]

    folded = text.casefold()
    for english, localized in table.items():
        if english.casefold() == folded:
            return localized
    return None


def translate_many(
    texts: List[str],
    language: str,
    dictionaries: Optional[Dictionaries] = None,
) -> List[dict]:
    """Batch lookup with a per-text flag telling whether a translation was found."""
    results = []
    for text in texts:
        found = _find(text, language, dictionaries)
        results.append({
            "original":        text,
            "translated":      text if found is None else found,
            "has_translation": found is not None,
        })
    return results
