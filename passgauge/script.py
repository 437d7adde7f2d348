"""
passgauge.script

zxcvbn-ts script template shared by the WebView and JSEngine backends.

The script is two parts:
- the zxcvbn-ts browser bundle (third-party, path from config), loaded once
  per execution context and never edited
- a small wrapper shipped in passgauge/assets with one placeholder ($arg1)
  where the password goes

The password is untrusted text being pasted into executable source, so it is
inserted as an escaped JavaScript string literal rather than raw text.
"""

import json
import os
from importlib import resources
from typing import Optional

from .errors import BackendUnavailable

PLACEHOLDER = "$arg1"
WRAPPER_NAME = "zxcvbn-ts-wrapper.js"
DEFAULT_SCRIPT_TIMEOUT = 10.0  # seconds


def js_string_literal(text: str) -> str:
    """
    Quote text as a JavaScript string literal.

    json.dumps with ensure_ascii escapes quotes, backslashes, control
    characters and everything non-ASCII (U+2028/U+2029 included, which are
    line terminators in older JS engines). "</" is split so the literal is
    also safe inside an HTML script element.
    """
    return json.dumps(text, ensure_ascii=True).replace("</", "<\\/")


def read_wrapper() -> str:
    return resources.files("passgauge").joinpath("assets", WRAPPER_NAME).read_text(encoding="utf-8")


class ScriptTemplate:
    def __init__(self, wrapper_source: str, bundle_source: Optional[str] = None,
                 bundle_path: Optional[str] = None, placeholder: str = PLACEHOLDER):
        if placeholder not in wrapper_source:
            raise ValueError(f"wrapper script has no {placeholder} placeholder")
        self.wrapper_source = wrapper_source
        self.placeholder = placeholder
        self._bundle_source = bundle_source
        self._bundle_path = bundle_path

    @classmethod
    def load(cls, bundle_path: Optional[str] = None) -> "ScriptTemplate":
        """Shipped wrapper plus the bundle at bundle_path (read on first use)."""
        return cls(read_wrapper(), bundle_path=bundle_path)

    @property
    def bundle_source(self) -> str:
        if self._bundle_source is None:
            if not self._bundle_path:
                raise BackendUnavailable("no zxcvbn-ts bundle configured (script_bundle_path)")
            if not os.path.isfile(self._bundle_path):
                raise BackendUnavailable(f"zxcvbn-ts bundle not found: {self._bundle_path}")
            with open(self._bundle_path, "r", encoding="utf-8") as f:
                self._bundle_source = f.read()
        return self._bundle_source

    def render(self, password: str) -> str:
        return self.wrapper_source.replace(self.placeholder, js_string_literal(password))
