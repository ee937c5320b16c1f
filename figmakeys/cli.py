#!/usr/bin/env python3
"""
figmakeys CLI — 從 Figma 檔案擷取文字、圖片與設計 token

  python -m figmakeys.cli texts <project> [--styles] [--variants mobile,desktop]
  python -m figmakeys.cli images <project> [--variants mobile,desktop] [--with-urls]
  python -m figmakeys.cli tokens <project> [--remove-prefix]
"""

import argparse
import json
import os
import sys
from pathlib import Path

import requests

from figmakeys import __version__

from .area_resolver import resolve_largest_variants
from .config import CONFIG_FILE_NAME, figma_file_from_config, load_config
from .document_parser import PageNotFoundError, parse_document
from .duplicates import FigmaFile, format_warnings_log, missing_variant_warnings
from .figma_client import FigmaAPIClient
from .filters import FilterPolicy, compile_patterns, image_policy, text_policy
from .images import group_images_by_type_and_scale, parse_image_node, request_scale
from .naming import comma_separated_list, sort_keys
from .texts import parse_text_node, strip_debug_info, text_key_characters
from .tokens import group_tokens, parse_token_node

WARNING_LOG_NAME = "figmakeys-log.txt"


def _list_option(value, fallback) -> list:
    items = comma_separated_list(value or "")
    return items or list(fallback or [])


def _figma_token(config: dict):
    return config.get("figma", {}).get("personalAccessToken") or os.environ.get("FIGMA_TOKEN")


def _load_file(args, config: dict, file_key: str):
    """讀取 --input JSON，或透過 Figma API 下載檔案。"""
    if args.input:
        with open(args.input, "r", encoding="utf-8") as f:
            return json.load(f)

    token = _figma_token(config)
    if not token:
        print("❌ 請設定 FIGMA_TOKEN 環境變數，或在 config 的 figma.personalAccessToken 設定。")
        return None
    try:
        return FigmaAPIClient(token).get_file(file_key)
    except requests.HTTPError as e:
        status = getattr(e.response, "status_code", None)
        if status == 403:
            print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_TOKEN。")
        elif status == 404:
            print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
        else:
            print(f"❌ Figma API 錯誤：{e}")
        return None


def _resolve_file(args, config: dict):
    """回傳 (figma_file, file_response)；失敗時回傳 (None, None)。"""
    project = args.project
    figma_file = figma_file_from_config(config, project)
    file_key = (figma_file.url if figma_file else None) or args.file_key or config.get("figma", {}).get("fileKey")

    if not file_key and not args.input:
        print(f"❌ 找不到專案 '{project}'，請在 config 的 files 設定，或使用 --file-key / --input。")
        return None, None

    file = _load_file(args, config, file_key)
    if not file:
        return None, None

    document = file.get("document", {})
    if figma_file is None:
        figma_file = FigmaFile(name=project or file.get("name", file_key or ""), url=file_key or "")
    if not figma_file.pages:
        figma_file.pages = [c.get("name") for c in document.get("children", []) if c.get("type") == "CANVAS"]
    print(f"   ✅ Loaded '{figma_file.name}' ({len(figma_file.pages)} pages)")
    return figma_file, file


def _report_warnings(warnings: list, args, project: str) -> None:
    if args.verbose:
        for warning in warnings:
            print(f"   ⚠️  {warning.key}: {warning.description}")
    if warnings:
        print(f"   ⚠️  Found a total of {len(warnings)} warnings")
    if not args.log:
        return
    if not warnings:
        print("   ℹ️  沒有警告，不寫出 log 檔。")
        return
    prefix = f"{project}." if project else ""
    log_path = Path.cwd() / f"{prefix}{WARNING_LOG_NAME}"
    log_path.write_text(format_warnings_log(warnings), encoding="utf-8")
    print(f"   📄 Warnings log saved to {log_path}")


def _write_output(data: dict, out_path) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if not out_path:
        print(text)
        return
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    print(f"   ✅ Written to {path}")


def _run_parser(args, figma_file: FigmaFile, file: dict, node_parser, policy: FilterPolicy, **kwargs):
    try:
        return parse_document(
            file.get("document", {}),
            figma_file,
            node_parser,
            policy=policy,
            project=args.project or figma_file.name,
            **kwargs,
        )
    except PageNotFoundError as e:
        print(f"❌ {e}")
        return None


def cmd_texts(args, config: dict) -> int:
    """Texts: TEXT 節點 → text key JSON."""
    figma_file, file = _resolve_file(args, config)
    if figma_file is None:
        return 1

    policy = text_policy(
        exclude=_list_option(args.exclude, config.get("excludeKeys")),
        exclude_children=_list_option(args.exclude_children, config.get("excludeChildren")),
        key_format=args.key_format or config.get("keyFormat"),
    )
    variants = _list_option(args.variants, config.get("variants"))
    result = _run_parser(args, figma_file, file, parse_text_node, policy, variants=variants)
    if result is None:
        return 1

    records = strip_debug_info(result.records)
    data = records if args.styles else text_key_characters(records)
    print(f"   📝 {len(data)} text keys")
    _write_output(sort_keys(data), args.out or config.get("output", {}).get("textsFile"))
    _report_warnings(result.warnings, args, figma_file.name)
    return 0


def cmd_images(args, config: dict) -> int:
    """Images: 有 export 設定的節點 → image key JSON（可附下載 URL）."""
    figma_file, file = _resolve_file(args, config)
    if figma_file is None:
        return 1

    policy = image_policy(
        exclude=_list_option(args.exclude, config.get("excludeKeys")),
        exclude_children=_list_option(args.exclude_children, config.get("excludeChildren")),
    )
    variants = _list_option(args.variants, config.get("variants"))
    images_dir = args.images_dir or config.get("output", {}).get("imagesDir")
    result = _run_parser(args, figma_file, file, parse_image_node, policy, variants=variants, out_dir=images_dir)
    if result is None:
        return 1

    records, missing = resolve_largest_variants(result.records, variants)
    if missing:
        print(f"   ⚠️  {len(missing)} images are missing a variant")
    if not records:
        print("❌ 0 images have been parsed from figma")
        return 1

    data = strip_debug_info(records)
    if args.with_urls:
        token = _figma_token(config)
        if not token:
            print("❌ --with-urls 需要 FIGMA_TOKEN。")
            return 1
        client = FigmaAPIClient(token)
        for group in group_images_by_type_and_scale(records).values():
            first = group[0]
            urls = client.get_images(
                figma_file.url,
                [r["id"] for r in group],
                format=first["format"],
                scale=request_scale(first["scale"]),
            )
            for record in group:
                data[record["name"]]["downloadUrl"] = urls.get(record["id"])

    print(f"   🖼️  {len(data)} images")
    _write_output(sort_keys(data), args.out)
    _report_warnings(result.warnings + missing_variant_warnings(missing, figma_file), args, figma_file.name)
    return 0


def cmd_tokens(args, config: dict) -> int:
    """Tokens: 共用樣式與常數 frame → 依群組分類的 token JSON."""
    figma_file, file = _resolve_file(args, config)
    if figma_file is None:
        return 1

    policy = FilterPolicy(exclude_children=compile_patterns(_list_option(args.exclude_children, [])))
    context_data = {"styles": file.get("styles") or {}, "noPrefix": args.remove_prefix}
    result = _run_parser(args, figma_file, file, parse_token_node, policy, context_data=context_data)
    if result is None:
        return 1

    groups = group_tokens(result.records)
    print(f"   🎨 {sum(len(g) for g in groups.values())} tokens in {len(groups)} groups")
    _write_output(groups, args.out or config.get("output", {}).get("tokensFile"))
    _report_warnings(result.warnings, args, figma_file.name)
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("project", nargs="?", help="Project name in config 'files' (e.g. 'gazelle')")
    p.add_argument("--file-key", help="Figma file key (when the project is not in config)")
    p.add_argument("--input", help="Read a downloaded Figma file JSON instead of calling the API")
    p.add_argument("--out", "-o", help="Output JSON path (stdout when omitted)")
    p.add_argument("--exclude-children", help="Comma separated names/regexes whose subtree is skipped")
    p.add_argument("--log", action="store_true", help=f"Write warnings to '<project>.{WARNING_LOG_NAME}'")
    p.add_argument("--verbose", "-v", action="store_true", help="Print every warning")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="figmakeys: extract texts, images and tokens from Figma",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=CONFIG_FILE_NAME, help="Config path")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    texts_p = sub.add_parser("texts", help="Text keys",
        epilog="Examples:\n  figmakeys texts gazelle --out texts/sv.json\n  figmakeys texts gazelle --styles --variants mobile,desktop",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_common(texts_p)
    texts_p.add_argument("--styles", action="store_true", help="Include css styles instead of plain characters")
    texts_p.add_argument("--variants", "-V", help="Comma separated variant frame names")
    texts_p.add_argument("--exclude", "-e", help="Comma separated keys/regexes to exclude")
    texts_p.add_argument("--key-format", help="Regex every text key must match")

    images_p = sub.add_parser("images", help="Image keys",
        epilog="Examples:\n  figmakeys images gazelle --variants mobile,desktop\n  figmakeys images gazelle --with-urls --out images.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_common(images_p)
    images_p.add_argument("--variants", "-V", help="Comma separated variant frame names")
    images_p.add_argument("--exclude", "-e", help="Comma separated keys/regexes to exclude")
    images_p.add_argument("--images-dir", help="Directory the image paths point into")
    images_p.add_argument("--with-urls", action="store_true", help="Fetch download URLs from the Figma images API")

    tokens_p = sub.add_parser("tokens", help="Design tokens",
        epilog="Examples:\n  figmakeys tokens design-system --out tokens.json",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    _add_common(tokens_p)
    tokens_p.add_argument("--remove-prefix", action="store_true", help="Drop the 'group/' prefix of style names")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    if args.command == "texts":
        return cmd_texts(args, config)
    if args.command == "images":
        return cmd_images(args, config)
    if args.command == "tokens":
        return cmd_tokens(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
