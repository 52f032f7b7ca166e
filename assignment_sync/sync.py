"""
Sync published Canvas assignments into the vault as Todo notes.

One note per assignment, created once: an assignment whose id already
appears as ``canvas-id`` in the course's Todo, Working or Done folder is
skipped, so notes the user moved along are never recreated.
"""
from __future__ import annotations

import logging
import typing as t
from dataclasses import dataclass, field

from assignment_sync.html_markdown import html_to_markdown
from assignment_sync.settings import CourseMapping, Settings
from assignment_sync.text import due_display, sanitize_filename
from canvas_api.client import CanvasApiError, CanvasClient
from canvas_api.models import CanvasAssignment
from note_templates import load_template
from vault_store.models import VaultFile
from vault_store.store import VaultStore

logger = logging.getLogger(__name__)

NOTE_FOLDERS = ("Todo", "Working", "Done")
TODO_FOLDER = "Todo"
STATUS_TODO_TAG = "Status/Todo"
NOTE_TEMPLATE = "assignment_note"

MISSING_CREDENTIALS = "Canvas Sync: Please configure your Canvas URL and API token in settings."
MISSING_MAPPINGS = "Canvas Sync: No course mappings configured. Add courses in settings."
SYNC_STARTED = "Syncing assignments from Canvas..."

Notify = t.Callable[[str], None]
ClientFactory = t.Callable[[Settings], CanvasClient]


def _log_notice(message: str) -> None:
    logger.info(message)


def default_client_factory(settings: Settings) -> CanvasClient:
    return CanvasClient(settings.canvas_base_url, settings.api_token)


@dataclass
class SyncReport:
    """Outcome of one sync run."""
    created: list[str] = field(default_factory=list)     # vault paths
    errors: dict[str, str] = field(default_factory=dict)  # subject -> message
    aborted: bool = False

    @property
    def total_created(self) -> int:
        return len(self.created)


def find_existing_canvas_ids(store: VaultStore, base_path: str, subfolders: t.Iterable[str]) -> set[str]:
    """``canvas-id`` values of the notes under ``base_path/<subfolder>/``."""
    ids: set[str] = set()
    files = store.list_all_files()
    for sub in subfolders:
        folder = f"{base_path}/{sub}"
        if not store.exists(folder):
            continue
        for file in files:
            if not (file.path.startswith(folder + "/") and file.extension == "md"):
                continue
            front_matter = store.front_matter_of(file)
            if front_matter is not None and front_matter.canvas_id is not None:
                ids.add(front_matter.canvas_id)
    return ids


def ensure_folder(store: VaultStore, path: str) -> None:
    if store.exists(path):
        return
    try:
        store.create_folder(path)
    except FileExistsError:
        # created concurrently; good enough
        pass


def render_note(assignment: CanvasAssignment, mapping: CourseMapping, settings: Settings) -> str:
    """Note content for an assignment, from the ``assignment_note`` template."""
    tags = [tag for tag in [mapping.subject_tag, *settings.extra_tags, STATUS_TODO_TAG] if tag]
    due_key = assignment.due_date_key
    instructions = (
        html_to_markdown(assignment.description)
        if assignment.description
        else f"See Canvas for details: {assignment.html_url}"
    )

    return load_template(NOTE_TEMPLATE).substitute(
        tags="\n".join(f"  - {tag}" for tag in tags),
        due_front_matter=f"\ndue: {due_key}" if due_key else "",
        canvas_id=assignment.id,
        canvas_url=assignment.html_url,
        subject=mapping.subject,
        due_display=due_display(assignment.due_at),
        instructions=instructions,
    )


def create_assignment_note(
    store: VaultStore,
    assignment: CanvasAssignment,
    mapping: CourseMapping,
    settings: Settings,
) -> VaultFile:
    """Write the note into ``<base>/<subject>/Todo``.

    A name clash with an existing note is resolved by appending the
    assignment id: ``Essay (1001).md``.
    """
    todo_folder = f"{settings.semester_base_path}/{mapping.subject}/{TODO_FOLDER}"
    ensure_folder(store, todo_folder)

    # names made only of forbidden characters would give a hidden ".md"
    base_name = sanitize_filename(assignment.name) or str(assignment.id)
    file_path = f"{todo_folder}/{base_name}.md"
    if store.exists(file_path):
        file_path = f"{todo_folder}/{base_name} ({assignment.id}).md"

    return store.create(file_path, render_note(assignment, mapping, settings))


def sync_course(
    store: VaultStore,
    client: CanvasClient,
    course_id: str,
    mapping: CourseMapping,
    settings: Settings,
    created: list[str],
) -> list[str]:
    """Create notes for the new published assignments of one course.

    Each note path is appended to ``created`` as soon as the note is
    written, so a later failure keeps the notes already made on record.

    :return: ``created``
    """
    assignments = client.fetch_assignments(course_id)
    published = [a for a in assignments if a.published]

    existing_ids = find_existing_canvas_ids(
        store,
        f"{settings.semester_base_path}/{mapping.subject}",
        NOTE_FOLDERS,
    )

    for assignment in published:
        if str(assignment.id) in existing_ids:
            continue
        note = create_assignment_note(store, assignment, mapping, settings)
        created.append(note.path)
        logger.debug("Created note %s for assignment %s", note.path, assignment.id)
    return created


def sync_assignments(
    store: VaultStore,
    settings: Settings,
    notify: Notify = _log_notice,
    client_factory: ClientFactory = default_client_factory,
) -> SyncReport:
    """Sync every active course mapping.

    Configuration problems are reported before any request is made. A
    failing course is reported and skipped; the others still sync.

    :param store: Target vault.
    :param settings: Canvas connection and course mappings.
    :param notify: Receives user-facing notices.
    :param client_factory: Builds the Canvas client (tests inject a fake transport).
    :return: What was created and which courses failed.
    """
    report = SyncReport()

    if not settings.canvas_base_url or not settings.api_token:
        notify(MISSING_CREDENTIALS)
        report.aborted = True
        return report

    active_mappings = settings.active_mappings()
    if not active_mappings:
        notify(MISSING_MAPPINGS)
        report.aborted = True
        return report

    notify(SYNC_STARTED)

    with client_factory(settings) as client:
        for course_id, mapping in active_mappings:
            try:
                sync_course(store, client, course_id, mapping, settings, report.created)
            except (CanvasApiError, OSError) as e:
                report.errors[mapping.subject] = str(e)
                logger.warning("Sync failed for course %s (%s): %s", course_id, mapping.subject, e)
                notify(f"Canvas Sync: Error syncing {mapping.subject}: {e}")

    notify(f"Sync complete: {report.total_created} new assignments created")
    return report
