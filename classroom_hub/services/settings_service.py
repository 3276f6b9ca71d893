"""
Tenant settings stored as a JSON file.

Settings are re-read from disk on every call so edits made by another
process show up on the next request.
"""
import copy
import json
import logging
import os

from .tags import slugify

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "jurisdiction": "ontario",
    "terms": 3,
    "subjects": ["Language", "Math", "Science", "Social Studies"],
    "gradeBands": ["K-3", "4-6", "7-8"],
    "lsCategories": [
        {"id": "responsibility", "label": "Responsibility"},
        {"id": "organization", "label": "Organization"},
        {"id": "independent-work", "label": "Independent Work"},
        {"id": "collaboration", "label": "Collaboration"},
        {"id": "initiative", "label": "Initiative"},
        {"id": "self-regulation", "label": "Self Regulation"},
    ],
}


class SettingsProvider:
    """Read-through access to the tenant settings file."""

    def __init__(self, settings_file):
        self.settings_file = os.path.expanduser(settings_file)

    def load(self):
        """Stored settings merged over the Ontario defaults."""
        settings = copy.deepcopy(DEFAULT_SETTINGS)
        if not os.path.exists(self.settings_file):
            return settings
        try:
            with open(self.settings_file, 'r') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Could not read settings file %s: %s", self.settings_file, e)
            return settings
        if isinstance(data, dict):
            settings.update(data)
        return settings

    def save(self, data):
        """Merge `data` into the stored settings and write them back."""
        settings = self.load()
        settings.update(data or {})
        directory = os.path.dirname(self.settings_file)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.settings_file, 'w') as f:
            json.dump(settings, f, indent=2)
        return settings

    def ls_categories(self):
        """Learning-skill categories as [{id, label}], ids filled from labels."""
        out = []
        for item in self.load().get("lsCategories") or []:
            if isinstance(item, str):
                item = {"label": item}
            label = str(item.get("label") or item.get("id") or "").strip()
            if not label:
                continue
            out.append({"id": item.get("id") or slugify(label), "label": label})
        return out
