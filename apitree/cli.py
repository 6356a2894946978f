import logging
import traceback
from typing import Annotated

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.tree import Tree

from apitree.codegen.codegen import Codegen
from apitree.codegen.tree import ResourceNode
from apitree.config import DocumentConfig, get_config
from apitree.exceptions import ApiTreeError

console = Console()
app = typer.Typer(
    name='apitree',
    help='Generate navigable Python API clients from Swagger/OpenAPI documents',
    no_args_is_help=True,
)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


@app.command()
def generate(
    config: Annotated[
        str | None,
        typer.Option(
            '--config', '-c', help='Path to configuration file (YAML or JSON)'
        ),
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
) -> None:
    """Generate client modules from configuration.

    If no config file is specified, will look for apitree.yaml, apitree.yml
    or a [tool.apitree] table in pyproject.toml in the current directory.

    Examples:
        apitree generate
        apitree generate --config my-config.yaml
        apitree generate -c config.json
    """
    _configure_logging(verbose)

    try:
        codegen_config = get_config(config)

        for document_config in codegen_config.documents:
            with Progress(
                SpinnerColumn(),
                TextColumn('[progress.description]{task.description}'),
                console=console,
            ) as progress:
                task = progress.add_task(
                    f'Generating client for {document_config.source}...',
                    total=None,
                )

                path = Codegen(document_config).generate()

                progress.update(
                    task,
                    description=f'Client generated for {document_config.source}!',
                )
            console.print('[dim]Generated files:[/dim]')
            console.print(f'  - {path}')

        console.print('[green]Successfully generated code[/green]')

    except ApiTreeError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)
    except Exception as e:
        console.print(f'[red]Error:[/red] {str(e)}')
        traceback.print_exc()
        raise typer.Exit(1)


@app.command()
def inspect(
    source: Annotated[str, typer.Argument(help='Path or URL of the API document')],
    root: Annotated[
        str | None, typer.Option('--root', '-r', help='Only show this resource family')
    ] = None,
    verbose: Annotated[
        bool, typer.Option('--verbose', '-v', help='Enable debug logging')
    ] = False,
) -> None:
    """Print the resource tree built from an API document.

    Examples:
        apitree inspect ./swagger.json
        apitree inspect https://kubernetes.local/swagger.json --root api
    """
    _configure_logging(verbose)

    try:
        tree = Codegen(DocumentConfig(source=source, output='')).build_tree()
    except ApiTreeError as e:
        console.print(f'[red]Error:[/red] {e}')
        raise typer.Exit(1)

    if root is not None:
        node = tree.get(root)
        if node is None:
            console.print(f"[red]Error:[/red] Resource '{root}' not found")
            raise typer.Exit(1)
        roots = [node]
    else:
        roots = list(tree.roots.values())

    display = Tree(f'[bold]{source}[/bold]')
    for node in roots:
        _add_branch(display, node, set())
    console.print(display)
    console.print(f'[dim]{len(tree)} resources[/dim]')


def _describe(node: ResourceNode) -> str:
    label = f'[bold]{node.name}[/bold]'
    if node.aliases:
        label += f' ({", ".join(node.aliases)})'
    if node.methods:
        label += f' [cyan]{" ".join(node.methods)}[/cyan]'
    if node.has_parameter:
        label += f' [magenta]{{{node.parameter_name}}}[/magenta]'
        if node.parameter_methods:
            label += f' [cyan]{" ".join(node.parameter_methods)}[/cyan]'
    return label


def _add_branch(parent: Tree, node: ResourceNode, seen: set[int]) -> None:
    if id(node) in seen:
        parent.add(f'{node.name} [dim](cycle)[/dim]')
        return
    branch = parent.add(_describe(node))
    seen = seen | {id(node)}
    for child in node.children:
        _add_branch(branch, child, seen)


@app.command()
def version() -> None:
    """Show the version of apitree."""
    from apitree import __version__

    console.print(f'apitree version: {__version__}')


if __name__ == '__main__':
    app()
