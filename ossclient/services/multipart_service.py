"""Multipart upload orchestration: plan, initiate, upload parts, complete or abort."""

import asyncio
from typing import List, Mapping, Optional, Union
from ..core.exceptions import InvalidInputError, OSSError
from ..core.resources import RequestHeaders
from ..schemas.multipart_schemas import FileChunk, UploadedPart, UploadSession
from ..utils.constants import UploadPhase, UploadState
from ..utils.helpers import format_file_size
from ..utils.logger import get_logger
from .chunk_planner import plan_chunks

logger = get_logger(__name__)


class MultipartUploader:
    """
    Drives one multipart upload at a time for a storage client.

    The upload either completes as a whole or is aborted: the first part
    failure stops further parts, aborts the upload and re-raises that part's
    error. Abort failures are logged and never replace the original error.
    """

    def __init__(self, client):
        self.client = client

    async def upload_file(
        self,
        object_name: str,
        file_path: str,
        chunk_size: Optional[int] = None,
        headers: Union[RequestHeaders, Mapping[str, str], None] = None,
        concurrency: Optional[int] = None,
    ) -> UploadSession:
        """
        Upload a local file as a multipart upload.
        Args:
            object_name: Destination object key
            file_path: Local source file
            chunk_size: Part size in bytes, defaults to the configured part size
            headers: Extra headers for the initiate request (Content-Type, x-oss-*)
            concurrency: Parts in flight at once, defaults to the configured value
        Returns:
            The retired session with every uploaded part in order
        """
        settings = self.client.settings
        chunk_size = chunk_size if chunk_size is not None else settings.part_size
        concurrency = concurrency if concurrency is not None else settings.part_concurrency
        if concurrency < 1:
            raise InvalidInputError("Concurrency must be at least 1", details={"concurrency": concurrency})

        session = UploadSession(object_name=object_name, bucket=self.client.bucket)
        chunks = await self._plan(file_path, chunk_size)
        session.transition(UploadState.INITIATING)
        await self._initiate(session, headers)
        log = logger.bind(object_name=object_name, upload_id=session.upload_id)
        log.info(
            "Multipart upload initiated",
            parts=len(chunks),
            part_size=format_file_size(chunk_size),
        )

        try:
            session.transition(UploadState.UPLOADING_PARTS)
            if concurrency == 1:
                await self._upload_sequential(session, file_path, chunks)
            else:
                await self._upload_concurrent(session, file_path, chunks, concurrency)

            session.transition(UploadState.COMPLETING)
            try:
                await self.client.complete_multipart_upload(
                    object_name, session.upload_id, session.parts
                )
            except OSSError as e:
                raise e.in_phase(UploadPhase.COMPLETE.label())
        except BaseException as e:
            # Any failure after initiate, cancellation included, leaves an open upload
            log.warning("Multipart upload failed", error=str(e), parts_uploaded=len(session.parts))
            await self._abort(session)
            raise

        session.transition(UploadState.COMPLETED)
        log.info("Multipart upload completed", parts=len(session.parts))
        return session

    async def _plan(self, file_path: str, chunk_size: int) -> List[FileChunk]:
        try:
            size = await self.client.files.file_size(file_path)
            chunks = plan_chunks(size, chunk_size)
        except OSSError as e:
            raise e.in_phase(UploadPhase.PLAN.label())
        if not chunks:
            raise InvalidInputError(
                f"Nothing to upload: {file_path} is empty", details={"path": file_path}
            ).in_phase(UploadPhase.PLAN.label())
        return chunks

    async def _initiate(self, session: UploadSession, headers) -> None:
        try:
            session.upload_id = await self.client.initiate_multipart_upload(
                session.object_name, headers
            )
        except OSSError as e:
            raise e.in_phase(UploadPhase.INITIATE.label())

    async def _upload_one(self, session: UploadSession, file_path: str, chunk: FileChunk) -> UploadedPart:
        try:
            return await self.client.upload_part(
                file_path, session.object_name, chunk, session.upload_id
            )
        except OSSError as e:
            raise e.in_phase(UploadPhase.PART.label(chunk.number))

    async def _upload_sequential(
        self, session: UploadSession, file_path: str, chunks: List[FileChunk]
    ) -> None:
        for chunk in chunks:
            session.record_part(await self._upload_one(session, file_path, chunk))

    async def _upload_concurrent(
        self,
        session: UploadSession,
        file_path: str,
        chunks: List[FileChunk],
        concurrency: int,
    ) -> None:
        """
        Bounded fan-out of the same per-part step.

        The first failure cancels every other part; all tasks are awaited until
        settled before the failure propagates, so nothing is still in flight
        against the upload id when it gets aborted.
        """
        semaphore = asyncio.Semaphore(concurrency)

        async def run(chunk: FileChunk) -> UploadedPart:
            async with semaphore:
                return await self._upload_one(session, file_path, chunk)

        tasks = [asyncio.create_task(run(chunk)) for chunk in chunks]
        failure: Optional[BaseException] = None
        try:
            for finished in asyncio.as_completed(tasks):
                try:
                    await finished
                except Exception as e:
                    failure = e
                    break
        finally:
            if failure is not None or any(not t.done() for t in tasks):
                for task in tasks:
                    task.cancel()
            # Settle everything, later part errors are suppressed
            await asyncio.gather(*tasks, return_exceptions=True)

        if failure is not None:
            raise failure

        for part in sorted((t.result() for t in tasks), key=lambda p: p.part_number):
            session.record_part(part)

    async def _abort(self, session: UploadSession) -> None:
        """Best-effort abort; its own failure is logged and swallowed."""
        session.transition(UploadState.ABORTING)
        try:
            await self.client.abort_multipart_upload(session.object_name, session.upload_id)
        except Exception as e:
            logger.warning(
                "Abort multipart upload failed",
                object_name=session.object_name,
                upload_id=session.upload_id,
                phase=UploadPhase.ABORT.label(),
                error=str(e),
            )
        else:
            logger.info(
                "Multipart upload aborted",
                object_name=session.object_name,
                upload_id=session.upload_id,
            )
        session.transition(UploadState.ABORTED)
