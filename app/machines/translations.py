# app/machines/translations.py

DEFAULT_LANG = "en"

TRANSLATIONS = {
    "es": {
        "explanation_error": "Encontré los datos, pero no pude generar una explicación.",
    },
    "en": {
        "explanation_error": "I found the data, but couldn't generate an explanation.",
    },
    "pt": {
        "explanation_error": "Encontrei os dados, mas não consegui gerar uma explicação.",
    },
    "sv": {
        "explanation_error": "Jag hittade datan, men kunde inte generera en förklaring.",
    },
}


def get_translation(lang, key):
    """Localized string for ``key``; unknown languages fall back to English."""
    language = lang if lang in TRANSLATIONS else DEFAULT_LANG
    return TRANSLATIONS[language][key]
