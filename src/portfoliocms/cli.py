"""CLI entry point for portfoliocms."""

import asyncio
import json
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from portfoliocms.browse.browser import SidebarBrowser
from portfoliocms.browse.state import Column
from portfoliocms.browse.view import HtmlSidebarView
from portfoliocms.browse.wheel import wheel_slots
from portfoliocms.config import (
    CONTENT_TYPES,
    DOWNLOAD_FILE_TYPES,
    SiteConfig,
    load_site_config,
    update_site_config,
)
from portfoliocms.editor.payload import serialize_blocks
from portfoliocms.render.content import format_date
from portfoliocms.render.document import render_document
from portfoliocms.storage.database import Database
from portfoliocms.storage.repository import ContentStore, StoreError

console = Console(force_terminal=True)


def _get_site_config(ctx) -> SiteConfig:
    """Get the site config from context."""
    return ctx.obj["site_config"]


def _open(ctx) -> Database:
    return Database(ctx.obj["db_path"])


@click.group()
@click.option(
    "--db",
    default=None,
    help="Database path (overrides site.json)",
    type=click.Path(),
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db, verbose):
    """portfoliocms - Manage and browse portfolio content."""
    ctx.ensure_object(dict)

    site_config = load_site_config()
    ctx.obj["site_config"] = site_config

    # Allow --db to override site config
    if db:
        ctx.obj["db_path"] = Path(db)
    else:
        ctx.obj["db_path"] = site_config.db_path

    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")


@cli.command()
@click.option("--name", default=None, help="Site name")
@click.option("--tagline", default=None, help="Site tagline")
@click.pass_context
def init(ctx, name, tagline):
    """Create the database and optionally set the site name."""
    if name is not None or tagline is not None:
        try:
            site_config = update_site_config(name=name, tagline=tagline)
        except ValueError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
        ctx.obj["site_config"] = site_config

    db_path = ctx.obj["db_path"]
    with Database(db_path):
        pass
    console.print(f"[green]Database ready:[/green] {db_path}")


@cli.command()
@click.pass_context
def status(ctx):
    """Show what the site contains."""
    db_path = ctx.obj["db_path"]
    site_config = _get_site_config(ctx)

    if not db_path.exists():
        console.print("[yellow]No database found.[/yellow] Run 'init' first.")
        return

    with Database(db_path) as db:
        store = ContentStore(db)
        counts = store.get_counts()
        stats = store.download_stats()

    console.print()
    console.print(f"[bold]Portfolio Status[/bold] [dim]({site_config.name})[/dim]")
    console.print()

    table = Table(title="Contents")
    table.add_column("Entity", style="cyan")
    table.add_column("Count", justify="right")
    for key, count in counts.items():
        table.add_row(key.replace("_", " ").capitalize(), str(count))
    console.print(table)

    if stats.get("total"):
        dl_table = Table(title="Download-enabled Content")
        dl_table.add_column("Type", style="cyan")
        dl_table.add_column("Count", justify="right")
        for t in CONTENT_TYPES:
            dl_table.add_row(t, str(stats.get(t, 0)))
        dl_table.add_row("[bold]Total[/bold]", f"[bold]{stats['total']}[/bold]")
        console.print(dl_table)


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


@cli.group(name="category")
def category_group():
    """Manage categories and subcategories."""
    pass


@category_group.command(name="list")
@click.pass_context
def category_list(ctx):
    """List categories with their subcategories."""
    with _open(ctx) as db:
        categories = ContentStore(db).list_categories()

    if not categories:
        console.print("[yellow]No categories yet.[/yellow]")
        return

    table = Table(title="Categories")
    table.add_column("Order", justify="right")
    table.add_column("Name", style="bold")
    table.add_column("Subcategories")
    table.add_column("ID", style="dim")
    for c in categories:
        subs = ", ".join(escape(s.name) for s in c.subcategories) or "[dim]none[/dim]"
        table.add_row(str(c.order_index), escape(c.name), subs, c.id)
    console.print(table)


@category_group.command(name="add")
@click.argument("name")
@click.option("--order", "order_index", type=int, default=0, help="Display order")
@click.pass_context
def category_add(ctx, name, order_index):
    """Create a category."""
    with _open(ctx) as db:
        try:
            category = ContentStore(db).create_category(name, order_index)
        except (StoreError, ValueError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    console.print(f"[green]Created category:[/green] {escape(category.name)} [dim]({category.id})[/dim]")


@category_group.command(name="remove")
@click.argument("category_id")
@click.pass_context
def category_remove(ctx, category_id):
    """Delete a category and everything in it."""
    with _open(ctx) as db:
        try:
            deleted = ContentStore(db).delete_category(category_id)
        except StoreError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    if deleted:
        console.print(f"[green]Deleted category[/green] {category_id}")
    else:
        console.print(f"[yellow]No category with id {category_id}[/yellow]")


@cli.group(name="subcategory")
def subcategory_group():
    """Manage subcategories."""
    pass


@subcategory_group.command(name="add")
@click.argument("category_id")
@click.argument("name")
@click.option("--order", "order_index", type=int, default=0, help="Display order")
@click.pass_context
def subcategory_add(ctx, category_id, name, order_index):
    """Create a subcategory under CATEGORY_ID."""
    with _open(ctx) as db:
        try:
            sub = ContentStore(db).create_subcategory(category_id, name, order_index)
        except (StoreError, ValueError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    console.print(f"[green]Created subcategory:[/green] {escape(sub.name)} [dim]({sub.id})[/dim]")


@subcategory_group.command(name="remove")
@click.argument("subcategory_id")
@click.pass_context
def subcategory_remove(ctx, subcategory_id):
    """Delete a subcategory and its content."""
    with _open(ctx) as db:
        try:
            deleted = ContentStore(db).delete_subcategory(subcategory_id)
        except StoreError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    if deleted:
        console.print(f"[green]Deleted subcategory[/green] {subcategory_id}")
    else:
        console.print(f"[yellow]No subcategory with id {subcategory_id}[/yellow]")


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


@cli.group(name="content")
def content_group():
    """Manage content items."""
    pass


@content_group.command(name="list")
@click.option("--subcategory", "subcategory_id", default=None, help="Only this subcategory")
@click.pass_context
def content_list(ctx, subcategory_id):
    """List content, newest first."""
    with _open(ctx) as db:
        store = ContentStore(db)
        if subcategory_id:
            items = store.list_content_by_subcategory(subcategory_id)
        else:
            items = store.list_content()

    if not items:
        console.print("[yellow]No content found.[/yellow]")
        return

    table = Table(title=f"Content ({len(items)})")
    table.add_column("Type", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("Created")
    table.add_column("Download", justify="center")
    table.add_column("ID", style="dim")
    for item in items:
        table.add_row(
            item.type.label,
            escape(item.title),
            format_date(item.created_at),
            "[green]✓[/green]" if item.download_enabled else "",
            item.id,
        )
    console.print(table)


@content_group.command(name="add")
@click.argument("subcategory_id")
@click.option("--type", "-t", "content_type", type=click.Choice(CONTENT_TYPES), required=True)
@click.option("--title", required=True, help="Title")
@click.option("--subtitle", default=None)
@click.option("--url", default=None, help="Media URL (image, video or audio)")
@click.option(
    "--file", "blocks_file",
    default=None,
    type=click.Path(exists=True),
    help="Article body: editor JSON (blocks list or {blocks: [...]})",
)
@click.option("--sidebar-title", default=None)
@click.option("--sidebar-subtitle", default=None)
@click.option("--author", default=None, help="Author name")
@click.option("--publication", default=None, help="Publication name")
@click.option("--published", default=None, help="Publication date (YYYY-MM-DD)")
@click.option("--source", default=None, help="Link to the original")
@click.option("--downloadable", is_flag=True, help="Enable downloads")
@click.pass_context
def content_add(ctx, subcategory_id, content_type, title, subtitle, url, blocks_file,
                sidebar_title, sidebar_subtitle, author, publication, published,
                source, downloadable):
    """Add a content item to SUBCATEGORY_ID."""
    body = None
    audio_url = None
    if content_type == "article":
        if not blocks_file:
            console.print("[red]Error:[/red] Articles need --file with editor JSON")
            return
        try:
            data = json.loads(Path(blocks_file).read_text(encoding="utf-8"))
        except ValueError as e:
            console.print(f"[red]Error:[/red] {blocks_file} is not valid JSON: {escape(str(e))}")
            return
        body = serialize_blocks(data)
        if body is None:
            console.print("[red]Error:[/red] The article has no content")
            return
    elif content_type == "audio":
        audio_url = url
    else:
        body = url

    with _open(ctx) as db:
        try:
            item = ContentStore(db).create_content(
                subcategory_id=subcategory_id,
                type=content_type,
                title=title,
                subtitle=subtitle,
                content=body,
                audio_url=audio_url,
                sidebar_title=sidebar_title,
                sidebar_subtitle=sidebar_subtitle,
                author_name=author,
                publication_name=publication,
                publication_date=published,
                source_link=source,
                download_enabled=downloadable,
            )
        except (StoreError, ValueError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    console.print(f"[green]Created {item.type.value}:[/green] {escape(item.title)} [dim]({item.id})[/dim]")


@content_group.command(name="show")
@click.argument("content_id")
@click.option("--html", "show_html", is_flag=True, help="Print the rendered article HTML")
@click.pass_context
def content_show(ctx, content_id, show_html):
    """Show one content item."""
    with _open(ctx) as db:
        store = ContentStore(db)
        item = store.get_content(content_id)
        collections = store.list_content_collections(content_id) if item else []

    if item is None:
        console.print(f"[red]Content not found:[/red] {content_id}")
        return

    console.print(f"[bold]{escape(item.title)}[/bold]")
    if item.subtitle:
        console.print(f"  [dim]{escape(item.subtitle)}[/dim]")
    console.print(f"  Type: {item.type.label}")
    console.print(f"  Created: {format_date(item.created_at)}")
    if item.sidebar_title:
        console.print(f"  Sidebar: {escape(item.sidebar_title)}")
    if item.media_url:
        console.print(f"  Media: {escape(item.media_url)}")
    if item.author_name:
        console.print(f"  Author: {escape(item.author_name)}")
    if item.publication_name:
        console.print(f"  Publication: {escape(item.publication_name)}")
    if collections:
        console.print(f"  Collections: {escape(', '.join(c.name for c in collections))}")
    if show_html and item.type.value == "article":
        console.print()
        console.print(render_document(item.content), markup=False, highlight=False)


@content_group.command(name="remove")
@click.argument("content_id")
@click.pass_context
def content_remove(ctx, content_id):
    """Delete a content item."""
    with _open(ctx) as db:
        try:
            deleted = ContentStore(db).delete_content(content_id)
        except StoreError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    if deleted:
        console.print(f"[green]Deleted content[/green] {content_id}")
    else:
        console.print(f"[yellow]No content with id {content_id}[/yellow]")


# ---------------------------------------------------------------------------
# Collections
# ---------------------------------------------------------------------------


@cli.group(name="collection")
def collection_group():
    """Manage collections."""
    pass


@collection_group.command(name="list")
@click.pass_context
def collection_list(ctx):
    """List collections."""
    with _open(ctx) as db:
        store = ContentStore(db)
        rows = [(c, len(store.list_collection_content(c.id))) for c in store.list_collections()]

    if not rows:
        console.print("[yellow]No collections yet.[/yellow]")
        return

    table = Table(title="Collections")
    table.add_column("Slug", style="cyan")
    table.add_column("Name", style="bold")
    table.add_column("Items", justify="right")
    table.add_column("Description")
    for c, count in rows:
        table.add_row(c.slug, escape(c.name), str(count), escape(c.description or ""))
    console.print(table)


@collection_group.command(name="create")
@click.argument("name")
@click.option("--slug", default=None, help="URL slug (derived from the name by default)")
@click.option("--description", default=None)
@click.option("--order", "order_index", type=int, default=0)
@click.pass_context
def collection_create(ctx, name, slug, description, order_index):
    """Create a collection."""
    with _open(ctx) as db:
        try:
            collection = ContentStore(db).create_collection(
                name, slug=slug, description=description, order_index=order_index
            )
        except (StoreError, ValueError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    console.print(f"[green]Created collection:[/green] {escape(collection.name)} [dim](/{collection.slug})[/dim]")


@collection_group.command(name="assign")
@click.argument("slug")
@click.argument("content_id")
@click.option("--order", "order_index", type=int, default=0)
@click.option("--remove", is_flag=True, help="Remove instead of adding")
@click.pass_context
def collection_assign(ctx, slug, content_id, order_index, remove):
    """Add CONTENT_ID to (or remove it from) the collection SLUG."""
    with _open(ctx) as db:
        store = ContentStore(db)
        collection = store.get_collection_by_slug(slug)
        if collection is None:
            console.print(f"[red]Collection not found:[/red] {slug}")
            return
        try:
            if remove:
                store.remove_content_from_collection(content_id, collection.id)
            else:
                store.add_content_to_collection(content_id, collection.id, order_index)
        except StoreError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    action = "Removed from" if remove else "Added to"
    console.print(f"[green]{action} {escape(collection.name)}:[/green] {content_id}")


@collection_group.command(name="show")
@click.argument("slug")
@click.pass_context
def collection_show(ctx, slug):
    """Show a collection's content in order."""
    with _open(ctx) as db:
        store = ContentStore(db)
        collection = store.get_collection_by_slug(slug)
        items = store.list_collection_content(collection.id) if collection else []

    if collection is None:
        console.print(f"[red]Collection not found:[/red] {slug}")
        return

    console.print(f"[bold]{escape(collection.name)}[/bold] [dim]/{collection.slug}[/dim]")
    if collection.description:
        console.print(f"  {escape(collection.description)}")
    if not items:
        console.print("  [dim]No content assigned.[/dim]")
        return
    for i, item in enumerate(items, 1):
        console.print(f"  {i}. [cyan]{item.type.label}[/cyan] {escape(item.title)} [dim]({item.id})[/dim]")


# ---------------------------------------------------------------------------
# Downloads & profile
# ---------------------------------------------------------------------------


@cli.group(name="download")
def download_group():
    """Manage downloadable resume/portfolio files."""
    pass


@download_group.command(name="list")
@click.pass_context
def download_list(ctx):
    """List downloadable files."""
    with _open(ctx) as db:
        downloads = ContentStore(db).list_downloads()

    if not downloads:
        console.print("[yellow]No downloadable files set.[/yellow]")
        return

    table = Table(title="Downloadable Files")
    table.add_column("Type", style="cyan")
    table.add_column("File", style="bold")
    table.add_column("URL")
    table.add_column("Updated")
    for d in downloads:
        table.add_row(
            DOWNLOAD_FILE_TYPES.get(d.file_type, d.file_type),
            escape(d.file_name),
            escape(d.file_url),
            format_date(d.updated_at),
        )
    console.print(table)


@download_group.command(name="set")
@click.argument("file_type", type=click.Choice(list(DOWNLOAD_FILE_TYPES)))
@click.argument("url")
@click.option("--name", "filename", default=None, help="Display filename")
@click.pass_context
def download_set(ctx, file_type, url, filename):
    """Set the file for FILE_TYPE (replaces any existing one)."""
    with _open(ctx) as db:
        try:
            download = ContentStore(db).save_download(file_type, url, filename)
        except (StoreError, ValueError) as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    console.print(f"[green]Saved {DOWNLOAD_FILE_TYPES[file_type]}:[/green] {escape(download.file_name)}")


@download_group.command(name="remove")
@click.argument("file_type", type=click.Choice(list(DOWNLOAD_FILE_TYPES)))
@click.pass_context
def download_remove(ctx, file_type):
    """Remove the file for FILE_TYPE."""
    with _open(ctx) as db:
        try:
            deleted = ContentStore(db).delete_download(file_type)
        except StoreError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            return
    if deleted:
        console.print(f"[green]Removed {DOWNLOAD_FILE_TYPES[file_type]}[/green]")
    else:
        console.print(f"[yellow]No {DOWNLOAD_FILE_TYPES[file_type]} set[/yellow]")


@cli.group(name="profile")
def profile_group():
    """View the profile."""
    pass


@profile_group.command(name="show")
@click.pass_context
def profile_show(ctx):
    """Show the profile / business card."""
    with _open(ctx) as db:
        profile = ContentStore(db).get_profile()

    if profile is None or not profile.full_name:
        console.print("[yellow]Profile not set up yet.[/yellow]")
        return

    console.print(f"[bold]{escape(profile.full_name)}[/bold]")
    for title in profile.job_titles:
        console.print(f"  {escape(title)}")
    if profile.location:
        console.print(f"  [dim]{escape(profile.location)}[/dim]")
    for label, value, visible in (
        ("Email", profile.email, profile.show_email),
        ("Phone", profile.phone, profile.show_phone),
        ("LinkedIn", profile.linkedin, profile.show_linkedin),
    ):
        if value:
            hidden = "" if visible else " [dim](hidden)[/dim]"
            console.print(f"  {label}: {escape(value)}{hidden}")
    if profile.skills:
        console.print(f"  Skills: {escape(', '.join(profile.skills))}")
    if profile.languages:
        console.print(f"  Languages: {escape(', '.join(profile.languages))}")


# ---------------------------------------------------------------------------
# Browse & export
# ---------------------------------------------------------------------------


@cli.command()
@click.option("--category", default=None, help="Category id")
@click.option("--subcategory", default=None, help="Subcategory id")
@click.option("--document", default=None, help="Content id")
@click.pass_context
def browse(ctx, category, subcategory, document):
    """Run the sidebar selection and print what the site would show."""
    with _open(ctx) as db:
        browser = SidebarBrowser(ContentStore(db), HtmlSidebarView())
        asyncio.run(browser.navigate_to(category, subcategory, document))
    state = browser.state

    if not state.categories:
        console.print("[yellow]No categories yet.[/yellow]")
        return

    for column, label in (
        (Column.CATEGORY, "Categories"),
        (Column.SUBCATEGORY, "Subcategories"),
        (Column.DOCUMENT, "Documents"),
    ):
        table = Table(title=label)
        table.add_column("", justify="center")
        table.add_column("Name")
        table.add_column("Distance", justify="right")
        for slot in wheel_slots(state.items(column), state.selected(column)):
            name = escape(getattr(slot.item, "name", None) or slot.item.nav_title)
            marker = "[green]●[/green]" if slot.is_selected else ""
            style = "bold" if slot.is_selected else "dim" if slot.proximity.value == "normal" else ""
            table.add_row(
                marker,
                f"[{style}]{name}[/{style}]" if style else name,
                "" if slot.distance is None else str(slot.distance),
            )
        if not state.items(column):
            table.add_row("", f"[dim]{state.status(column).value}[/dim]", "")
        console.print(table)

    item = state.current_document
    if item is not None:
        console.print(f"[bold]Showing:[/bold] {escape(item.title)} [dim]({item.type.label})[/dim]")


@cli.command(name="export")
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(),
    help="Output directory",
)
@click.pass_context
def export_cmd(ctx, output):
    """Export all content as JSON files."""
    from portfoliocms.storage.export import export_all

    site_config = _get_site_config(ctx)
    output_dir = Path(output) if output else site_config.exports_dir

    with _open(ctx) as db:
        summary = export_all(ContentStore(db), output_dir)

    console.print(f"[green]Exported {summary['total']} content items to {output_dir}[/green]")
    console.print(f"  By category: {summary['by_category']}")
    console.print(f"  By collection: {summary['by_collection']}")


if __name__ == "__main__":
    cli()
