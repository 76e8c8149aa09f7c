import asyncio
from pathlib import Path
from typing import List

from loguru import logger

from .assets import discover_image_assets, group_by_stem, prepare_output_dir
from .config import Settings, SourceConfig
from .exceptions import ImageProcessingException
from .render import process_image_asset
from .results import SerializationReport, SourceResult
from .staging import copy_static_assets, publish_assets


COMPONENT = "serializers.asset.serialize"


class AssetSerializer:
    """
    Orchestrates the asset pipeline:
    - copy raw and content assets into the staging directory
    - for each source with an image folder, in declaration order:
        * discover supported images
        * transcode all of them concurrently into `<asset_path>/<images.name>`
        * wait for every file to settle and collect failures
    - in production mode, mirror the staging directory into the publish path
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.log = logger.bind(component=COMPONENT)

    def run(self) -> SerializationReport:
        return asyncio.run(self.serialize())

    async def serialize(self) -> SerializationReport:
        paths = self.settings.paths
        report = SerializationReport()
        self.log.info("Processing assets from config...")

        self.log.info(
            f"Copying static assets from {paths.raw_asset_path} and "
            f"{paths.raw_content_asset_path} to {paths.asset_path}"
        )
        await asyncio.to_thread(
            copy_static_assets,
            paths.raw_asset_path,
            paths.raw_content_asset_path,
            paths.asset_path,
        )
        self.log.success("Static assets have been copied")

        self.log.info("Processing image assets from configuration files")
        for source in self.settings.sources:
            if source.images is None:
                self.log.debug(f"Source '{source.dir_name}' declares no images, skipping")
                continue
            report.sources.append(await self._process_source(source))

        if report.ok:
            self.log.success("Processing image assets from configuration files complete")
        else:
            self.log.error(
                f"Processing image assets finished with {len(report.failures)} failed file(s)"
            )

        report.published = await self._publish(report)
        return report

    async def _process_source(self, source: SourceConfig) -> SourceResult:
        paths = self.settings.paths
        out_dir = await asyncio.to_thread(prepare_output_dir, paths.asset_path, source)
        assets = await asyncio.to_thread(
            discover_image_assets, paths.raw_content_path, source
        )
        self.log.info(
            f"Processing {len(assets)} image(s) for source '{source.dir_name}' into {out_dir}"
        )

        result = SourceResult(source=source, output_dir=out_dir)
        outcomes = await self._process_all(assets, out_dir)
        for outcome in outcomes:
            if isinstance(outcome, ImageProcessingException):
                self.log.error(f"{outcome.asset_path}: {outcome.cause!r}")
                result.failures.append(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome
            else:
                self.log.debug(f"Wrote {outcome.primary.name} and {outcome.secondary.name}")
                result.processed.append(outcome)
        return result

    async def _process_all(self, assets: List[Path], out_dir: Path) -> list:
        groups = group_by_stem(assets)
        for stem, group in groups.items():
            if len(group) > 1:
                names = ", ".join(p.name for p in group)
                self.log.warning(
                    f"{names} share the stem '{stem}' and overwrite each other's "
                    f"secondary output; processing them one at a time"
                )

        # Every file runs to completion; one failure never cancels its siblings.
        results = await asyncio.gather(
            *(self._process_group(group, out_dir) for group in groups.values()),
            return_exceptions=True,
        )
        outcomes = []
        for result in results:
            if isinstance(result, BaseException):
                outcomes.append(result)
            else:
                outcomes.extend(result)
        return outcomes

    async def _process_group(self, group: List[Path], out_dir: Path) -> list:
        outcomes = []
        for asset in group:
            try:
                outcomes.append(
                    await process_image_asset(asset, out_dir, self.settings.transcode)
                )
            except ImageProcessingException as exc:
                outcomes.append(exc)
        return outcomes

    async def _publish(self, report: SerializationReport) -> bool:
        paths = self.settings.paths
        if not self.settings.is_production:
            self.log.info(f"Environment is {self.settings.env}, skipping publish")
            return False
        if not report.ok:
            self.log.error("Skipping publish because some image assets failed to process")
            return False

        self.log.info(f"Copying assets from {paths.asset_path} to {paths.publish_path}")
        await asyncio.to_thread(publish_assets, paths.asset_path, paths.publish_path)
        self.log.success("Copying assets complete")
        return True
