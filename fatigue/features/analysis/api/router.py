"""
Message fatigue analysis routes.

Upload a CSV export, then page through the per-recipient and per-message
tables, fetch chart series and download exports. Every read endpoint works
on the snapshot published by the most recent successful upload.
"""

from fastapi import APIRouter, File, HTTPException, Query, Response, UploadFile, status
from starlette.concurrency import run_in_threadpool

from fatigue.config import settings
from fatigue.features.analysis.domain import AnalysisResult
from fatigue.features.analysis.pipeline import analysis_pipeline
from fatigue.features.analysis.pipeline.ingestion import (
    IngestionError,
    InvalidFileError,
    MissingColumnsError,
    ingestion_service,
)
from fatigue.features.analysis.pipeline.ingestion.service import VALID_DATA_MESSAGE
from fatigue.features.analysis.services import (
    NoAnalysisError,
    analysis_store,
    chart_service,
    export_service,
)
from fatigue.features.analysis.views import (
    ALL,
    ListView,
    ListViewError,
    SortDirection,
    ViewState,
    message_list_view,
    user_list_view,
)
from fatigue.infrastructure.observability.logging import get_logger
from fatigue.models.api.analysis_response import (
    AnalysisSummaryResponse,
    ChartResponse,
    MessageMetricResponse,
    MessagesListResponse,
    PageInfoResponse,
    UploadResponse,
    UserMetricResponse,
    UsersListResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])

ANALYSIS_COMPLETE_MESSAGE = "Analysis complete! Results displayed below."


def _current_result() -> AnalysisResult:
    try:
        return analysis_store.current()
    except NoAnalysisError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


def _ingestion_http_error(error: IngestionError) -> HTTPException:
    if isinstance(error, MissingColumnsError):
        return HTTPException(
            status_code=422,
            detail={"message": error.message, "missing_columns": error.missing_columns},
        )
    if isinstance(error, InvalidFileError) and error.too_large:
        return HTTPException(status_code=413, detail=error.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)


def _parse_page_size(value: str | None) -> int | str:
    if value is None:
        return settings.DEFAULT_PAGE_SIZE
    if value.lower() == ALL:
        return ALL
    try:
        page_size = int(value)
    except ValueError:
        page_size = None
    if page_size not in settings.PAGE_SIZE_OPTIONS:
        options = ", ".join(str(option) for option in settings.PAGE_SIZE_OPTIONS)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"page_size must be one of: {options}, all",
        )
    return page_size


def _build_state(
    view: ListView,
    collection,
    search: str,
    category: str,
    sort: str | None,
    direction: SortDirection | None,
    page_size: str | None,
    page: int,
) -> ViewState:
    defaults = view.default_state()
    state = ViewState(
        filter_text=search,
        category_filter=category,
        sort_column=sort if sort is not None else defaults.sort_column,
        sort_direction=direction if direction is not None else defaults.sort_direction,
        page_size=_parse_page_size(page_size),
        current_page=1,
    )
    try:
        view.validate(state)
    except ListViewError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    # Out-of-range pages are ignored rather than clamped
    return view.navigate(collection, state, page)


@router.post("/upload", response_model=UploadResponse)
async def upload_csv(file: UploadFile = File(..., description="CSV export of send events")):
    """Analyse an uploaded CSV and publish the result, replacing any previous one."""
    filename = file.filename or ""
    max_bytes = settings.get_upload_limits()["max_bytes"]

    try:
        # Reject on the declared size before buffering the body
        ingestion_service.validate_upload(filename, file.size or 0)
        content = await file.read(max_bytes + 1)
        result = await run_in_threadpool(analysis_pipeline.run, filename, content)
    except IngestionError as e:
        logger.warning(
            "Upload rejected",
            filename=filename,
            error_type=type(e).__name__,
            error=e.message,
        )
        raise _ingestion_http_error(e)
    except Exception as e:
        logger.error("Error analysing upload", filename=filename, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to analyse file",
        )

    analysis_store.publish(result)
    summary = AnalysisSummaryResponse.from_domain(result)

    return UploadResponse(
        success=True,
        validation_message=VALID_DATA_MESSAGE,
        status_message=ANALYSIS_COMPLETE_MESSAGE,
        **summary.model_dump(),
    )


@router.get("/summary", response_model=AnalysisSummaryResponse)
def get_summary():
    """Summary cards, date range and file info for the current analysis."""
    return AnalysisSummaryResponse.from_domain(_current_result())


@router.get("/users", response_model=UsersListResponse)
def list_users(
    search: str = Query(default="", description="Case-insensitive email substring"),
    risk: str = Query(default=ALL, pattern="^(all|low|medium|high)$", description="Risk filter"),
    sort: str | None = Query(default=None, description="Sort column"),
    direction: SortDirection | None = Query(default=None, description="asc or desc"),
    page_size: str | None = Query(default=None, description="Rows per page or 'all'"),
    page: int = Query(default=1, description="1-based page number, ignored when out of range"),
):
    """Filtered, sorted page of per-recipient fatigue metrics."""
    result = _current_result()
    state = _build_state(
        user_list_view, result.users, search, risk, sort, direction, page_size, page
    )
    listing = user_list_view.apply(result.users, state)

    return UsersListResponse(
        rows=[UserMetricResponse.from_domain(user) for user in listing.rows],
        page_info=PageInfoResponse.from_domain(listing.page_info),
        sort_column=state.sort_column,
        sort_direction=state.sort_direction.value,
    )


@router.get("/messages", response_model=MessagesListResponse)
def list_messages(
    search: str = Query(default="", description="Case-insensitive message name substring"),
    kind: str = Query(
        default=ALL,
        pattern="^(all|campaign|newsletter|transactional|template|unknown)$",
        description="Message kind filter",
    ),
    sort: str | None = Query(default=None, description="Sort column (default message_count)"),
    direction: SortDirection | None = Query(default=None, description="asc or desc"),
    page_size: str | None = Query(default=None, description="Rows per page or 'all'"),
    page: int = Query(default=1, description="1-based page number, ignored when out of range"),
):
    """Filtered, sorted page of per-message statistics."""
    result = _current_result()
    state = _build_state(
        message_list_view, result.messages, search, kind, sort, direction, page_size, page
    )
    listing = message_list_view.apply(result.messages, state)

    return MessagesListResponse(
        rows=[MessageMetricResponse.from_domain(message) for message in listing.rows],
        page_info=PageInfoResponse.from_domain(listing.page_info),
        sort_column=state.sort_column,
        sort_direction=state.sort_direction.value,
    )


@router.get("/charts/timeline", response_model=ChartResponse)
def get_timeline_chart():
    """Messages sent per day."""
    chart = chart_service.timeline(_current_result())
    return ChartResponse(labels=chart.labels, series=chart.series)


@router.get("/charts/risk-distribution", response_model=ChartResponse)
def get_risk_distribution_chart():
    """Recipient counts per risk level."""
    chart = chart_service.risk_distribution(_current_result())
    return ChartResponse(labels=chart.labels, series=chart.series)


@router.get("/export/csv")
def export_csv():
    """Download every recipient's metrics as CSV."""
    content = export_service.users_csv(_current_result())
    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{settings.CSV_EXPORT_FILENAME}"'
        },
    )


@router.get("/export/report")
def export_report():
    """Download the summary report."""
    document = export_service.render_report(_current_result())
    return Response(
        content=document,
        media_type="text/html",
        headers={"Content-Disposition": f'attachment; filename="{settings.REPORT_FILENAME}"'},
    )
