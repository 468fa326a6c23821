"""Launch orchestration: get a Claude command running in a visible pane.

The flow for a launch is:

1. Validate the project path (and session ID when there is one).
2. Detect a terminal emulator. None found -> NoTerminal.
3. Without tmux, open the terminal directly in the project.
4. Otherwise try to create the project's tmux session and attach to it.
5. If another launcher created it first (duplicate session), split a pane
   into it instead and attach only if nobody is watching it.
6. If the split fails because the session vanished in between, try to
   create it exactly once more, then fall back to a direct terminal.

Session existence is never checked up front: two launchers can race between
any check and the following action, so each step tolerates losing that race.
"""

from __future__ import annotations

from ..errors import DuplicateSession, NoTerminal, SplitFailed, TmuxError
from ..logging import get_logger
from ..store.models import (
    LaunchOutcome,
    LaunchRequest,
    LaunchResult,
    TerminalConfig,
)
from .tempfiles import TempFileRegistry
from .terminal import TerminalDetector, TerminalSpawner
from .tmux import TmuxManager, derive_session_name
from .validation import shell_escape, validate_project_path, validate_session_id

log = get_logger("orchestrator")

# Common flags for all claude launches
CLAUDE_FLAGS = "--dangerously-skip-permissions"
CLAUDE_COMMAND = f"claude {CLAUDE_FLAGS}"


def resume_command(session_id: str) -> str:
    """Build the command that resumes a session. The ID must be validated."""
    return f"{CLAUDE_COMMAND} --resume {session_id}"


def context_command(context_file: str) -> str:
    """Build the command that starts Claude with a context file as its prompt."""
    return f"{CLAUDE_COMMAND} -p \"$(cat '{shell_escape(context_file)}')\""


class LaunchOrchestrator:
    """Runs commands in tmux panes, falling back to plain terminal windows.

    Collaborators are injected so tests can simulate tmux races without
    touching real processes.
    """

    def __init__(
        self,
        detector: TerminalDetector | None = None,
        tmux: TmuxManager | None = None,
        spawner: TerminalSpawner | None = None,
        temp_files: TempFileRegistry | None = None,
    ) -> None:
        self.detector = detector or TerminalDetector()
        self.tmux = tmux or TmuxManager()
        self.spawner = spawner or TerminalSpawner()
        self.temp_files = temp_files or TempFileRegistry()

    # --- Public launch surface ---

    def launch_resume(self, session_id: str, project: str) -> LaunchResult:
        """Resume a past session in its project's tmux session."""
        validate_session_id(session_id)
        return self.launch(LaunchRequest(project, resume_command(session_id), session_id))

    def launch_fresh(self, project: str) -> LaunchResult:
        """Start a new Claude session in the project."""
        return self.launch(LaunchRequest(project, CLAUDE_COMMAND))

    def launch_with_context(self, project: str, context: str) -> LaunchResult:
        """Start a new Claude session primed with a summary of an old one."""
        validate_project_path(project)
        context_file = self.temp_files.create(context)
        return self.launch(LaunchRequest(project, context_command(str(context_file))))

    def launch_direct(self, project: str, command: str) -> LaunchResult:
        """Run a command in a new terminal window, bypassing tmux."""
        validate_project_path(project)
        terminal = self._require_terminal()
        return self._spawn_direct(terminal, project, command)

    def launch_resume_direct(self, session_id: str, project: str) -> LaunchResult:
        """Resume a past session in a new terminal window, bypassing tmux."""
        validate_session_id(session_id)
        return self.launch_direct(project, resume_command(session_id))

    # --- State machine ---

    def launch(self, request: LaunchRequest) -> LaunchResult:
        """Run ``request.command`` in a visible pane for ``request.project_path``.

        Raises:
            InvalidInput: If the path or session ID is unsafe
            NoTerminal: If no supported terminal is installed
            CreateFailed: If tmux refuses to create the session
            SpawnFailed: If the terminal could not be started
        """
        project = request.project_path
        command = request.command

        validate_project_path(project)
        if request.session_id is not None:
            validate_session_id(request.session_id)

        terminal = self._require_terminal()

        if not self.tmux.exists():
            log.info("tmux not found, launching directly")
            return self._spawn_direct(terminal, project, command)

        session_name = derive_session_name(project)

        try:
            return self._create_and_attach(terminal, session_name, project, command)
        except DuplicateSession:
            log.info(f"Session {session_name} already exists, splitting pane")

        try:
            self.tmux.split_pane(session_name, project, command)
        except SplitFailed as e:
            log.info(f"Split failed for {session_name} ({e.message}), retrying create")
            return self._retry_create(terminal, session_name, project, command)

        if not self.tmux.is_attached(session_name):
            self.spawner.spawn_attach(terminal, session_name)
        return LaunchResult(LaunchOutcome.SPLIT_PANE, terminal, session_name)

    def _create_and_attach(
        self,
        terminal: TerminalConfig,
        session_name: str,
        project: str,
        command: str,
    ) -> LaunchResult:
        self.tmux.create_session(session_name, project, command)
        log.info(f"Created session {session_name}, attaching")
        self.spawner.spawn_attach(terminal, session_name)
        return LaunchResult(LaunchOutcome.NEW_SESSION, terminal, session_name)

    def _retry_create(
        self,
        terminal: TerminalConfig,
        session_name: str,
        project: str,
        command: str,
    ) -> LaunchResult:
        try:
            return self._create_and_attach(terminal, session_name, project, command)
        except TmuxError as e:
            log.warning(
                f"Retry create failed for {session_name} ({e.message}), "
                "falling back to direct launch"
            )
        self.spawner.spawn_direct(terminal, project, command)
        return LaunchResult(
            LaunchOutcome.DIRECT, terminal, session_name=session_name, degraded=True
        )

    def _spawn_direct(
        self, terminal: TerminalConfig, project: str, command: str
    ) -> LaunchResult:
        self.spawner.spawn_direct(terminal, project, command)
        return LaunchResult(LaunchOutcome.DIRECT, terminal)

    def _require_terminal(self) -> TerminalConfig:
        terminal = self.detector.detect()
        if terminal is None:
            names = ", ".join(t.name for t in self.detector.candidates)
            raise NoTerminal(f"No supported terminal found. Install one of: {names}")
        return terminal
