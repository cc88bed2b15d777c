"""Release note generation logic."""

import logging
import shutil
from typing import Callable, Optional

from ..config import NotesConfig, compute_config_defaults, validate_config
from ..github import GithubClient, ensure_installed_dependencies
from .lister import GithubFromToPRLister, PRLister
from .printer import ReleaseNotesPrinter
from .processor import PREntryProcessor
from .ref import Ref, parse_ref

logger = logging.getLogger(__name__)

ListerFactory = Callable[[str, Ref, Ref, str], PRLister]


def github_lister(repo: str, from_ref: Ref, to_ref: Ref, branch: str) -> PRLister:
    return GithubFromToPRLister(GithubClient(repo), from_ref, to_ref, branch)


class NotesGenerator:
    """Feeds the listed PRs through the entry processor into the printer."""

    def __init__(self, lister: PRLister, processor: PREntryProcessor, printer: ReleaseNotesPrinter):
        self.lister = lister
        self.processor = processor
        self.printer = printer

    def run(self) -> str:
        """Generate the release notes.

        Returns:
            The rendered release notes document
        """
        for pr in self.lister.list_prs():
            self.printer.add(self.processor.process(pr))
        return self.printer.render()


class NotesCommand:
    """Resolves the configuration and generates the release notes for it."""

    def __init__(self, config: NotesConfig,
                 which: Callable[[str], Optional[str]] = shutil.which,
                 lister_factory: ListerFactory = github_lister):
        """Initialize the command.

        Args:
            config: Configuration as given by the user
            which: Resolves executables in the PATH
            lister_factory: Builds the PR lister for (repo, from, to, branch)
        """
        self.config = config
        self.which = which
        self.lister_factory = lister_factory

    def run(self) -> str:
        """Validate the configuration, compute defaults and generate the notes.

        Returns:
            The rendered release notes document

        Raises:
            NotesError: If any step fails, nothing is generated in that case
        """
        validate_config(self.config)
        self.config = compute_config_defaults(self.config)
        config = self.config

        ensure_installed_dependencies(self.which)

        from_ref, to_ref = parse_ref(config.from_ref), parse_ref(config.to_ref)
        logger.info(f"Generating release notes for {config.repository} from {from_ref} to {to_ref} on branch {config.branch}")

        printer = ReleaseNotesPrinter(
            config.repository,
            from_ref.value,
            is_pre_release=config.pre_release_version,
            print_deprecation=config.deprecation,
            print_kubernetes_support=config.add_kubernetes_version_support,
        )

        generator = NotesGenerator(
            self.lister_factory(config.repository, from_ref, to_ref, config.branch),
            PREntryProcessor(config.prefix_area_label),
            printer,
        )
        return generator.run()
