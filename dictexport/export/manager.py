"""
Export Manager Module

Main ExportManager class that coordinates the export workflow:
- Parse the source dictionary once
- Re-key records directly (identity modes) or translate them
- Write each target's lookup table
- Report progress and a final summary per target
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from dictexport.config import DEFAULT_PREVIEW_LIMIT, get_translation_settings, load_config
from dictexport.core.records import DictionaryRecord
from dictexport.core.source import load_records
from dictexport.core.writer import TableRow, TableWriter, format_preview
from dictexport.exceptions import PersistenceError
from dictexport.export.progress import ExportProgress, ExportSummary
from dictexport.export.targets import (
    IDENTITY_BY_ENGLISH_EQUIVALENT,
    IDENTITY_BY_WORD,
    ExportTarget,
    get_targets,
)
from dictexport.logger import get_logger
from dictexport.translator.client import TranslationClient
from dictexport.translator.results import (
    Translated,
    TranslationResult,
    Unavailable,
    text_or,
)

logger = get_logger(__name__)

ProgressCallback = Callable[[ExportProgress], None]
SummaryCallback = Callable[[ExportSummary], None]

_IDENTITY_KEYS: Dict[str, Callable[[DictionaryRecord], str]] = {
    IDENTITY_BY_WORD: lambda record: record.word,
    IDENTITY_BY_ENGLISH_EQUIVALENT: lambda record: record.englishEquivalent,
}


@dataclass(frozen=True)
class TranslatedRecord:
    """A record paired with the translation results for its word and definition."""
    record: DictionaryRecord
    word_result: TranslationResult
    definition_result: TranslationResult

    @property
    def key_translated(self) -> bool:
        return isinstance(self.word_result, Translated)

    @property
    def fell_back(self) -> bool:
        return not (self.key_translated and isinstance(self.definition_result, Translated))

    def to_row(self) -> TableRow:
        # Pronunciation and English equivalent are never translated
        return TableRow(
            key=text_or(self.word_result, self.record.word),
            definition=text_or(self.definition_result, self.record.definition),
            pronunciation=self.record.pronunciation,
            englishEquivalent=self.record.englishEquivalent,
        )


class ExportManager:
    """
    Runs dictionary exports.

    Features:
    - Identity re-keying by headword or English equivalent
    - Translate-then-key through a LibreTranslate-compatible service,
      falling back to the original text when translation is unavailable
    - Fixed pacing between translated records
    - Progress callbacks at a configurable cadence
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        client: Optional[TranslationClient] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize export manager.

        Args:
            config: Configuration dict, loaded from the config file if omitted
            client: Translation client, created from config on first use if omitted
            sleep: Pacing function (seconds)
        """
        self.config = config if config is not None else load_config()
        self.settings = get_translation_settings(self.config)
        self.pacing_delay = self.settings["pacing_delay"]
        self.progress_every = self.settings["progress_every"]
        self.output_dir = Path(self.config.get("output_dir", "."))
        self.source_path = Path(self.config.get("source_dictionary", "dictionary.txt"))
        self._client = client
        self._owns_client = client is None
        self._sleep = sleep

    @property
    def client(self) -> TranslationClient:
        if self._client is None:
            self._client = TranslationClient.from_config(self.config)
        return self._client

    def close(self) -> None:
        if self._owns_client and self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "ExportManager":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def get_targets(self, codes: Optional[List[str]] = None) -> List[ExportTarget]:
        return get_targets(self.config, codes)

    def load_records(self) -> List[DictionaryRecord]:
        """Parse the configured source dictionary (raises SourceUnreadableError)."""
        return load_records(self.source_path)

    def run_export(
        self,
        target: ExportTarget,
        records: List[DictionaryRecord],
        progress_callback: Optional[ProgressCallback] = None,
        summary_callback: Optional[SummaryCallback] = None,
    ) -> ExportSummary:
        """
        Export records to one target's lookup table.

        Args:
            target: Target to export
            records: Records in source order
            progress_callback: Receives ExportProgress updates
            summary_callback: Receives the final ExportSummary

        Returns:
            ExportSummary for the run

        Raises:
            PersistenceError: If the output cannot be written (run aborted)
        """
        output_path = target.output_path(self.output_dir)
        start_time = time.time()
        logger.info(
            f"Exporting {len(records)} entries to {output_path} "
            f"(target={target.code}, mode={target.mode})"
        )

        try:
            with TableWriter(output_path, target=target.code) as writer:
                if target.is_translated:
                    stats = self._export_translated(target, records, writer, progress_callback)
                else:
                    stats = self._export_identity(target, records, writer, progress_callback)
        except PersistenceError:
            logger.exception(f"Export to {output_path} aborted (target={target.code})")
            raise

        summary = ExportSummary(
            target=target.code,
            output=str(output_path),
            mode=target.mode,
            exported_count=len(records),
            translated_count=stats["translated"],
            fallback_count=stats["fallback"],
            elapsed_time=time.time() - start_time,
            preview=format_preview(stats["preview"], total=len(records)),
        )
        logger.info(
            "Exported %d entries to %s (target: %s) in %.1f seconds (translated=%d, fallback=%d)",
            summary.exported_count,
            summary.output,
            target.code,
            summary.elapsed_time,
            summary.translated_count,
            summary.fallback_count,
        )
        if summary_callback:
            summary_callback(summary)
        return summary

    def _export_identity(
        self,
        target: ExportTarget,
        records: List[DictionaryRecord],
        writer: TableWriter,
        progress_callback: Optional[ProgressCallback],
    ) -> Dict[str, Any]:
        """Single pass keyed by a record field verbatim; no network, no pacing."""
        key_for = _IDENTITY_KEYS[target.mode]
        preview: List[TableRow] = []

        for record in records:
            row = TableRow(
                key=key_for(record),
                definition=record.definition,
                pronunciation=record.pronunciation,
                englishEquivalent=record.englishEquivalent,
            )
            writer.write_entry(row)
            if len(preview) < DEFAULT_PREVIEW_LIMIT:
                preview.append(row)

        if progress_callback:
            progress_callback(ExportProgress(target=target.code, completed=len(records), total=len(records)))
        return {"translated": 0, "fallback": 0, "preview": preview}

    def _export_translated(
        self,
        target: ExportTarget,
        records: List[DictionaryRecord],
        writer: TableWriter,
        progress_callback: Optional[ProgressCallback],
    ) -> Dict[str, Any]:
        """Sequential pass; word and definition of each record translate concurrently."""
        total = len(records)
        translated_count = 0
        fallback_count = 0
        preview: List[TableRow] = []

        logger.info(
            f"Translating {total} entries {target.source_language}->{target.target_language} "
            f"for {target.language_name}; this may take a while"
        )

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix=f"translate-{target.code}") as executor:
            for index, record in enumerate(records, start=1):
                translated = self._translate_record(executor, target, record)
                row = translated.to_row()
                writer.write_entry(row)

                if translated.key_translated:
                    translated_count += 1
                if translated.fell_back:
                    fallback_count += 1
                if len(preview) < DEFAULT_PREVIEW_LIMIT:
                    preview.append(row)

                if index % self.progress_every == 0 or index == total:
                    logger.info(f"{target.code}: {index}/{total}")
                    if progress_callback:
                        progress_callback(ExportProgress(target=target.code, completed=index, total=total))

                self._sleep(self.pacing_delay)

        return {"translated": translated_count, "fallback": fallback_count, "preview": preview}

    def _translate_record(
        self,
        executor: ThreadPoolExecutor,
        target: ExportTarget,
        record: DictionaryRecord,
    ) -> TranslatedRecord:
        word_future = executor.submit(
            self.client.translate, record.word, target.source_language, target.target_language
        )
        definition_future = executor.submit(
            self.client.translate, record.definition, target.source_language, target.target_language
        )
        return TranslatedRecord(
            record=record,
            word_result=self._result_of(word_future),
            definition_result=self._result_of(definition_future),
        )

    @staticmethod
    def _result_of(future: Future) -> TranslationResult:
        try:
            return future.result()
        except Exception as e:
            # A translation failure never aborts the run
            logger.warning(f"Translation call raised, using original text: {e}")
            return Unavailable(str(e))

    def export_all(
        self,
        codes: Optional[List[str]] = None,
        progress_callback: Optional[ProgressCallback] = None,
        summary_callback: Optional[SummaryCallback] = None,
    ) -> List[ExportSummary]:
        """
        Parse the source once and export every requested target in order.

        Raises:
            SourceUnreadableError: Before any export if the source cannot be read
            ConfigError: If a requested target is unknown
            PersistenceError: Aborts the remaining targets
        """
        targets = self.get_targets(codes)
        records = self.load_records()

        summaries = []
        for target in targets:
            summaries.append(
                self.run_export(
                    target,
                    records,
                    progress_callback=progress_callback,
                    summary_callback=summary_callback,
                )
            )

        logger.info("All exports complete.")
        return summaries
