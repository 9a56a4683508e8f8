# docsearch/cli.py
"""
Command line entry point.

    docsearch index docs.gl/gl4 --out index.json
    docsearch search "bind texture to buffer" --index index.json
    docsearch serve --index index.json --port 6969
    docsearch query "bind texture" --url http://127.0.0.1:6969
    docsearch stats docs.gl/gl4/glBindTexture.xml --index index.json
"""

import argparse
import logging
import sys

from docsearch import config
from docsearch.client import SearchClient
from docsearch.errors import DocsearchError
from docsearch.indexer import Indexer, top_terms
from docsearch.service import QueryService
from docsearch.storage import load_index, save_index

logger = logging.getLogger("docsearch")


def parse_args(argv):
    ap = argparse.ArgumentParser(prog="docsearch", description="TF-IDF search over XML documents")
    ap.add_argument("--log-level", default=config.LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("index", help="Crawl a directory and write the index file")
    p.add_argument("root", help="Corpus directory (or a single file)")
    p.add_argument("--out", default=config.INDEX_PATH, help="Index file to write")
    p.add_argument("--suffix", action="append", dest="suffixes",
                   help="Document suffix to index (repeatable, default: %s)" % ",".join(config.DOC_SUFFIXES))

    p = sub.add_parser("search", help="Rank documents for a query against a local index")
    p.add_argument("query")
    p.add_argument("--index", default=config.INDEX_PATH, help="Index file to read")
    p.add_argument("--limit", type=int, default=config.DEFAULT_LIMIT, help="Max results (0 = none)")

    p = sub.add_parser("serve", help="Serve /api/search over HTTP")
    p.add_argument("--index", default=config.INDEX_PATH, help="Index file to read")
    p.add_argument("--host", default=config.HOST)
    p.add_argument("--port", type=int, default=config.PORT)

    p = sub.add_parser("query", help="Send a query to a running server")
    p.add_argument("query", nargs="?", default="")
    p.add_argument("--health", action="store_true", help="Show the server's index status instead")
    p.add_argument("--url", default=f"http://{config.HOST}:{config.PORT}")
    p.add_argument("--limit", type=int, default=config.DEFAULT_LIMIT)
    p.add_argument("--timeout", type=float, default=config.CLIENT_TIMEOUT)

    p = sub.add_parser("stats", help="Show index size, or the top terms of one document")
    p.add_argument("doc_id", nargs="?")
    p.add_argument("--index", default=config.INDEX_PATH, help="Index file to read")
    p.add_argument("--top", type=int, default=10)

    args = ap.parse_args(argv)
    if getattr(args, "limit", None) is not None and args.limit < 0:
        ap.error("--limit must be >= 0")
    return args


def printable(path):
    """Undecodable filename bytes (surrogate escapes) are shown as \\udcXX."""
    return path.encode("utf-8", "backslashreplace").decode("utf-8")


def cmd_index(args):
    indexer = Indexer(suffixes=args.suffixes or config.DOC_SUFFIXES)
    index = indexer.build(args.root)
    save_index(index, args.out)
    print(f"Indexed {len(index)} documents into {args.out} ({len(indexer.skipped)} skipped)")
    for s in indexer.skipped:
        print(f"  skipped {printable(s.doc_id)}: {printable(s.reason)}")


def cmd_search(args):
    service = QueryService.from_path(args.index)
    resp = service.search(args.query, limit=args.limit)
    for hit in resp.hits:
        print(f"{printable(hit.doc_id)}\t{hit.score:.6f}")


def cmd_serve(args):
    from docsearch.app import create_app

    service = QueryService.from_path(args.index)
    app = create_app(service)
    logger.info("[Serve] Listening on http://%s:%d/", args.host, args.port)
    app.run(host=args.host, port=args.port, threaded=True)


def cmd_query(args):
    client = SearchClient(args.url, timeout=args.timeout)
    if args.health:
        h = client.health()
        print(f"{h['status']}: {h['documents']} documents from {h['index']}")
        return
    for hit in client.search(args.query, limit=args.limit):
        print(f"{hit['documentId']}\t{hit['score']:.6f}")


def cmd_stats(args):
    index = load_index(args.index)
    if args.doc_id is None:
        vocab = {t for tf in index.values() for t in tf}
        tokens = sum(sum(tf.values()) for tf in index.values())
        print(f"{args.index} contains {len(index)} files, {len(vocab)} distinct terms, {tokens} tokens")
        return
    tf = index.get(args.doc_id)
    if tf is None:
        print(f"{printable(args.doc_id)} is not in {args.index}", file=sys.stderr)
        raise SystemExit(1)
    for term, count in top_terms(tf, args.top):
        print(f"{term}\t{count}")


COMMANDS = {
    "index": cmd_index,
    "search": cmd_search,
    "serve": cmd_serve,
    "query": cmd_query,
    "stats": cmd_stats,
}


def main(argv=None):
    args = parse_args(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        COMMANDS[args.command](args)
    except DocsearchError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
