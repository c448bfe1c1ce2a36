"""Localized dialog texts for lxc-creator.

The selected language is resolved once at startup into a :class:`MessageCatalog`
which is handed to every component that renders operator-facing text.
"""

import os
from typing import Dict, Optional

from lxccreator.constants import SUPPORTED_LANGUAGES

_TABLES: Dict[str, Dict[str, str]] = {
    "en": {
        "welcome": "Proxmox LXC container creator",
        "title_error": "Error",
        "title_info": "Info",
        "root_ok": "Root privileges confirmed.",
        "mode_title": "Container type",
        "choose_mode": "Choose the container type:",
        "mode_unpriv": "Unprivileged container",
        "mode_priv": "Privileged container",
        "mode_cancel": "Cancel",
        "ctid_assigned": "Assigned container ID:",
        "hostname": "Hostname of the container:",
        "password": "Root password (at least 8 characters):",
        "template_select": "Select a template:",
        "template_chosen": "Selected template: {template}",
        "ostype_detected": "Detected OS type:",
        "rootfs": "Root filesystem size (GB):",
        "cores": "CPU cores:",
        "memory": "Memory (MB):",
        "octet": "Last octet of the IPv4 address ({base}x):",
        "ssh_add": "Look up an SSH public key in authorized_keys?",
        "ssh_comment_prompt": "Comment of the SSH key to install (e.g. user@laptop):",
        "ssh_lookup": "Looking up SSH key with comment",
        "ssh_found": "SSH key found and staged.",
        "ssh_not_found": "No matching SSH key found. Temporary root password login will be enabled.",
        "ssh_setup": "SSH key installed in the container.",
        "ssh_temp": "Temporary root password login enabled.",
        "input_empty": "Input must not be empty.",
        "input_invalid": "Invalid input, please try again.",
        "hostname_invalid": "Invalid hostname. Use letters, digits and inner hyphens only.",
        "password_invalid": "The password must contain at least 8 characters.",
        "integer_invalid": "Please enter a positive whole number without leading zeros.",
        "octet_invalid": "Please enter a number between 1 and 254.",
        "summary_title": "Summary",
        "summary": (
            "ID: {id}\nHostname: {hostname}\nTemplate: {template}\nOS type: {os_type}\nType: {ct_type}\n"
            "Cores: {cores}\nMemory: {memory} MB\nRoot FS: {rootfs} GB\n"
            "Network: {network}\nSSH key: {ssh}"
        ),
        "confirm": "Create the container with these settings?",
        "preview": "Dry run: configuration preview",
        "dry_run_done": "Dry run finished. No container was created.",
        "creating": "Creating container...",
        "created": "Container created.",
        "started": "Container started.",
        "update": "Updating packages in the container...",
        "update_ok": "Packages updated.",
        "locale_wait": "Configuring locales...",
        "locale_ok": "Locales configured.",
        "timezone_ok": "Timezone configured.",
        "cleanup": "Removing temporary files...",
        "cleanup_ok": "Temporary files removed.",
        "reboot": "Reboot the container now?",
        "rebooting": "Rebooting container...",
        "yes": "yes",
        "no": "no",
        "dhcp": "DHCP",
        "abort": "Aborted by operator.",
        "failed": "Provisioning failed:",
    },
    "de": {
        "welcome": "Proxmox LXC Container-Ersteller",
        "title_error": "Fehler",
        "title_info": "Info",
        "root_ok": "Root-Rechte bestätigt.",
        "mode_title": "Container-Typ",
        "choose_mode": "Bitte Container-Typ wählen:",
        "mode_unpriv": "Unprivilegierter Container",
        "mode_priv": "Privilegierter Container",
        "mode_cancel": "Abbrechen",
        "ctid_assigned": "Zugewiesene Container-ID:",
        "hostname": "Hostname des Containers:",
        "password": "Root-Passwort (mindestens 8 Zeichen):",
        "template_select": "Template auswählen:",
        "template_chosen": "Gewähltes Template: {template}",
        "ostype_detected": "Erkannter OS-Typ:",
        "rootfs": "Größe des Root-Dateisystems (GB):",
        "cores": "CPU-Kerne:",
        "memory": "Arbeitsspeicher (MB):",
        "octet": "Letztes Oktett der IPv4-Adresse ({base}x):",
        "ssh_add": "SSH-Schlüssel in authorized_keys suchen?",
        "ssh_comment_prompt": "Kommentar des zu installierenden SSH-Schlüssels (z.B. user@laptop):",
        "ssh_lookup": "Suche SSH-Schlüssel mit Kommentar",
        "ssh_found": "SSH-Schlüssel gefunden und bereitgestellt.",
        "ssh_not_found": "Kein passender SSH-Schlüssel gefunden. Temporärer Root-Login per Passwort wird aktiviert.",
        "ssh_setup": "SSH-Schlüssel im Container eingerichtet.",
        "ssh_temp": "Temporärer Root-Login per Passwort aktiviert.",
        "input_empty": "Die Eingabe darf nicht leer sein.",
        "input_invalid": "Ungültige Eingabe, bitte erneut versuchen.",
        "hostname_invalid": "Ungültiger Hostname. Nur Buchstaben, Ziffern und innere Bindestriche.",
        "password_invalid": "Das Passwort muss mindestens 8 Zeichen lang sein.",
        "integer_invalid": "Bitte eine positive ganze Zahl ohne führende Nullen eingeben.",
        "octet_invalid": "Bitte eine Zahl zwischen 1 und 254 eingeben.",
        "summary_title": "Zusammenfassung",
        "summary": (
            "ID: {id}\nHostname: {hostname}\nTemplate: {template}\nOS-Typ: {os_type}\nTyp: {ct_type}\n"
            "Kerne: {cores}\nSpeicher: {memory} MB\nRoot-FS: {rootfs} GB\n"
            "Netzwerk: {network}\nSSH-Schlüssel: {ssh}"
        ),
        "confirm": "Container mit diesen Einstellungen erstellen?",
        "preview": "Testlauf: Konfigurationsvorschau",
        "dry_run_done": "Testlauf beendet. Es wurde kein Container erstellt.",
        "creating": "Container wird erstellt...",
        "created": "Container erstellt.",
        "started": "Container gestartet.",
        "update": "Pakete im Container werden aktualisiert...",
        "update_ok": "Pakete aktualisiert.",
        "locale_wait": "Locales werden eingerichtet...",
        "locale_ok": "Locales eingerichtet.",
        "timezone_ok": "Zeitzone eingerichtet.",
        "cleanup": "Temporäre Dateien werden entfernt...",
        "cleanup_ok": "Temporäre Dateien entfernt.",
        "reboot": "Container jetzt neu starten?",
        "rebooting": "Container wird neu gestartet...",
        "yes": "ja",
        "no": "nein",
        "dhcp": "DHCP",
        "abort": "Vom Benutzer abgebrochen.",
        "failed": "Bereitstellung fehlgeschlagen:",
    },
}


class MessageCatalog:
    """Message table for one language."""

    def __init__(self, language: str = "en"):
        if language not in _TABLES:
            raise ValueError(f"Unsupported language: {language}")
        self.language = language
        self._table = _TABLES[language]

    def get(self, key: str, **kwargs: object) -> str:
        text = self._table.get(key)
        if text is None:
            text = _TABLES["en"].get(key, key)
        return text.format(**kwargs) if kwargs else text

    __call__ = get


def detect_language(explicit: Optional[str] = None, environ=None) -> str:
    """Pick the catalog language from an explicit value or the LANG prefix."""
    if explicit:
        code = explicit.strip().lower()[:2]
        if code in SUPPORTED_LANGUAGES:
            return code
        raise ValueError(
            f"Unsupported language '{explicit}'. Choose one of: {', '.join(SUPPORTED_LANGUAGES)}"
        )

    environ = os.environ if environ is None else environ
    code = (environ.get("LANG") or "").strip().lower()[:2]
    return code if code in SUPPORTED_LANGUAGES else "en"
