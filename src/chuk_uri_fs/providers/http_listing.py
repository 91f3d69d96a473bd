"""
Child names from HTML directory listings.

Servers render folder listings as HTML pages of links. Only links that point
at a direct child of the listed folder are kept; navigation links (parent,
sort-order queries, fragments, other hosts) are dropped.
"""

from urllib.parse import unquote, urljoin, urlsplit

from bs4 import BeautifulSoup


def parse_listing(html: str, folder_url: str) -> list[str]:
    """
    Extract child names from a listing page.

    Args:
        html: Listing page body
        folder_url: URL of the listed folder, ending with '/'

    Returns:
        Child names in document order without duplicates, still percent-encoded;
        folder entries keep their trailing '/'
    """
    base = urlsplit(folder_url)
    base_path = base.path if base.path.endswith("/") else base.path + "/"

    soup = BeautifulSoup(html, "html.parser")
    names: list[str] = []
    seen: set[str] = set()

    for link in soup.find_all("a", href=True):
        href = link["href"].strip()
        if not href or href.startswith(("#", "?")):
            continue

        target = urlsplit(urljoin(folder_url, href))
        if (target.scheme, target.netloc) != (base.scheme, base.netloc):
            continue
        if target.query or target.fragment:
            continue
        if not target.path.startswith(base_path):
            continue

        name = target.path[len(base_path) :]
        bare = name.rstrip("/")
        if not bare or "/" in bare or unquote(bare) in (".", ".."):
            continue

        if name not in seen:
            seen.add(name)
            names.append(name)

    return names
