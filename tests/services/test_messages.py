import pytest

from lxccreator.messages import MessageCatalog, detect_language


def test_catalog_formats_placeholders():
    catalog = MessageCatalog("en")

    assert catalog("template_chosen", template="debian.tar.zst") == "Selected template: debian.tar.zst"


def test_german_catalog_has_translations():
    assert MessageCatalog("de").get("abort") == "Vom Benutzer abgebrochen."


def test_unsupported_language_is_rejected():
    with pytest.raises(ValueError):
        MessageCatalog("fr")


def test_detect_language_from_environment():
    assert detect_language(environ={"LANG": "de_DE.UTF-8"}) == "de"
    assert detect_language(environ={"LANG": "fr_FR.UTF-8"}) == "en"
    assert detect_language(environ={}) == "en"
    assert detect_language("DE") == "de"

    with pytest.raises(ValueError, match="Unsupported language"):
        detect_language("fr")
