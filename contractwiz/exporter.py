"""Write a generated contract bundle to disk.

The bundle is everything derived from one configuration:

- ``<Name>.sol``            -- the contract source
- ``README.md``             -- the deployment guide
- ``gas-estimate.json``     -- the gas breakdown
- ``contract-config.json``  -- the configuration itself, for regeneration

Source, README and estimate are computed up front by the pure core; only
the file writes run in worker threads.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from pydantic import BaseModel, Field

from contractwiz.config import DEFAULT_CONFIG, Config
from contractwiz.gas import GasEstimate, estimate_gas_cost
from contractwiz.generator import generate_contract
from contractwiz.models import ContractConfiguration
from contractwiz.reporter import render_readme
from contractwiz.utils import contract_filename, write_text


class ContractExportError(Exception):
    """Raised when the bundle cannot be written."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"Cannot write {path}: {message}")


class ExportResult(BaseModel):
    """Paths written by :meth:`ContractExporter.export`."""

    contract_path: Path
    readme_path: Path
    gas_path: Path
    config_path: Path
    estimate: GasEstimate = Field(default_factory=GasEstimate)

    def all_paths(self) -> list[Path]:
        return [self.contract_path, self.readme_path, self.gas_path, self.config_path]


class ContractExporter:
    """Generates and writes the contract bundle for a configuration."""

    def __init__(self, settings: Config | None = None) -> None:
        self.settings = settings or DEFAULT_CONFIG

    async def export(
        self,
        config: ContractConfiguration,
        output_dir: str | Path | None = None,
    ) -> ExportResult:
        """Write the bundle into *output_dir* (default: ``settings.output_dir``).

        Raises:
            ContractExportError: If any file cannot be written.
        """
        out = Path(output_dir) if output_dir is not None else self.settings.output_dir

        source = generate_contract(config, self.settings)
        readme = render_readme(config, self.settings)
        estimate = estimate_gas_cost(config, self.settings)

        result = ExportResult(
            contract_path=out / contract_filename(config.name),
            readme_path=out / "README.md",
            gas_path=out / "gas-estimate.json",
            config_path=out / "contract-config.json",
            estimate=estimate,
        )
        contents = {
            result.contract_path: source,
            result.readme_path: readme,
            result.gas_path: estimate.model_dump_json(indent=2),
            result.config_path: config.model_dump_json(indent=2),
        }

        await asyncio.gather(*(
            self._write(path, content) for path, content in contents.items()
        ))
        return result

    async def _write(self, path: Path, content: str) -> None:
        try:
            await asyncio.to_thread(write_text, path, content)
        except OSError as exc:
            raise ContractExportError(path, str(exc)) from exc
