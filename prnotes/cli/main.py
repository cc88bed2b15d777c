"""Main CLI entry point for prnotes."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config
from ..errors import NotesError
from ..releasenote.generator import NotesCommand


@click.command()
@click.option('--repository', help='The repo to run the tool from (default kubernetes-sigs/cluster-api)')
@click.option('--from', 'from_ref',
              help='The tag or commit to start from. It must be formatted as heads/<branch name> for branches '
                   'and tags/<tag name> for tags. If not set, it will be calculated from release.')
@click.option('--to', 'to_ref',
              help='The ref (tag, branch or commit) to stop at. It must be formatted as heads/<branch name> for '
                   'branches and tags/<tag name> for tags. If not set, it will default to branch.')
@click.option('--branch', help='The branch to generate the notes from. If not set, it will be calculated from release.')
@click.option('--release', 'new_tag', help='The tag for the new release.')
@click.option('--prefix-area-label/--no-prefix-area-label', default=None,
              help='If enabled, will prefix the area label. (default true)')
@click.option('--pre-release-version/--no-pre-release-version', default=None,
              help='If enabled, will add a pre-release warning header. (default false)')
@click.option('--deprecation/--no-deprecation', default=None,
              help='If enabled, will add a templated deprecation warning header. (default true)')
@click.option('--add-kubernetes-version-support/--no-add-kubernetes-version-support', default=None,
              help='If enabled, will add the Kubernetes version support header. (default true)')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.version_option(version=__version__, prog_name="prnotes")
def cli(repository, from_ref, to_ref, branch, new_tag, prefix_area_label, pre_release_version,
        deprecation, add_kubernetes_version_support, config_file, debug):
    """Print the PRs merged between two refs as release notes."""

    # Logs go to stderr, stdout only carries the notes
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger = logging.getLogger('prnotes')

    try:
        config = get_config(
            config_file,
            repository=repository,
            from_ref=from_ref,
            to_ref=to_ref,
            branch=branch,
            new_tag=new_tag,
            prefix_area_label=prefix_area_label,
            pre_release_version=pre_release_version,
            deprecation=deprecation,
            add_kubernetes_version_support=add_kubernetes_version_support,
        )
        notes = NotesCommand(config).run()
    except NotesError as e:
        logger.error(str(e))
        sys.exit(1)

    click.echo(notes, nl=False)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
