"""
Export targets.

A target binds a language code to an output file and a keying mode:
- identity-by-word: key is the source headword
- identity-by-english-equivalent: key is the English equivalent
- translate: key and definition are translated source->target
"""

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional

from dictexport import language_codes as lc
from dictexport.exceptions import ConfigError
from dictexport.logger import get_logger

logger = get_logger(__name__)

IDENTITY_BY_WORD = "identity-by-word"
IDENTITY_BY_ENGLISH_EQUIVALENT = "identity-by-english-equivalent"
TRANSLATE = "translate"

KEYING_MODES = (IDENTITY_BY_WORD, IDENTITY_BY_ENGLISH_EQUIVALENT, TRANSLATE)


@dataclass(frozen=True)
class ExportTarget:
    """One destination language/artifact configuration."""
    code: str
    output: str
    mode: str
    source_language: Optional[str] = None  # translate mode only
    target_language: Optional[str] = None  # translate mode only

    @property
    def is_translated(self) -> bool:
        return self.mode == TRANSLATE

    @property
    def language_name(self) -> str:
        return lc.get_language_name(self.code) or self.code

    def output_path(self, output_dir: Any = ".") -> Path:
        return Path(output_dir) / self.output

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_source: str = "es") -> "ExportTarget":
        """
        Build a target from configuration.

        Translate targets default their source language to default_source and
        their target language to the target code.

        Raises:
            ConfigError: If a field is missing or the mode is unknown
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Target entry must be an object, got {type(data).__name__}")

        code = (data.get("code") or "").strip()
        output = (data.get("output") or "").strip()
        mode = data.get("mode", "")
        if not code or not output:
            raise ConfigError(
                "Target entries need both 'code' and 'output'",
                details={"target": data},
            )
        if mode not in KEYING_MODES:
            raise ConfigError(
                f"Unknown keying mode '{mode}' for target '{code}'",
                details={"target": code, "mode": mode, "allowed": list(KEYING_MODES)},
            )

        if mode != TRANSLATE:
            return cls(code=code, output=output, mode=mode)

        source_language = data.get("source_language") or default_source
        target_language = data.get("target_language") or code
        if lc.languages_match(source_language, target_language, strict=True):
            raise ConfigError(
                f"Target '{code}' translates {source_language} into itself",
                details={"target": code},
            )
        for lang in (source_language, target_language):
            if not lc.is_valid_language_code(lang):
                logger.warning(f"Target '{code}' uses unrecognised language code '{lang}'")
        return cls(
            code=code,
            output=output,
            mode=mode,
            source_language=source_language,
            target_language=target_language,
        )


def get_targets(config: Dict[str, Any], codes: Optional[List[str]] = None) -> List[ExportTarget]:
    """
    Resolve configured targets, optionally restricted to codes (in the order given).

    Raises:
        ConfigError: If a requested code is not configured
    """
    default_source = config.get("source_language", "es")
    configured = [ExportTarget.from_dict(entry, default_source) for entry in config.get("targets", [])]
    if not codes:
        return configured

    by_code = {target.code: target for target in configured}
    selected: List[ExportTarget] = []
    for code in codes:
        code = code.strip() if isinstance(code, str) else code
        if code not in by_code:
            raise ConfigError(
                f"Unknown export target '{code}'",
                code="unknown_target",
                details={"target": code, "available": list(by_code)},
            )
        if by_code[code] not in selected:
            selected.append(by_code[code])
    return selected


def get_target(config: Dict[str, Any], code: str) -> ExportTarget:
    """Resolve a single configured target by code."""
    return get_targets(config, [code])[0]
