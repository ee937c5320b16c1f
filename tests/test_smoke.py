"""
Smoke tests：驗證套件可匯入、版本與公開 API 存在。
"""


def test_import_package():
    """套件可正常匯入"""
    import figmakeys
    assert figmakeys.__version__ == "0.1.0"


def test_public_api():
    """公開 API 可從 figmakeys 取得"""
    from figmakeys import (
        __version__,
        reduce_tree,
        parse_document,
        merge_variants,
        find_duplicate_warnings,
        resolve_largest_variants,
        parse_text_node,
        parse_image_node,
        parse_token_node,
        FilterPolicy,
        PageNotFoundError,
        load_config,
    )
    assert __version__ == "0.1.0"
    assert issubclass(PageNotFoundError, LookupError)
    assert callable(reduce_tree)
    assert callable(parse_document)
    assert callable(merge_variants)
    assert callable(find_duplicate_warnings)
    assert callable(resolve_largest_variants)
    assert callable(parse_text_node)
    assert callable(parse_image_node)
    assert callable(parse_token_node)
    assert callable(load_config)
    assert FilterPolicy().check({"name": "x"}).include


def test_cli_parser_builds():
    """CLI 子指令都已註冊"""
    from figmakeys.cli import build_parser

    parser = build_parser()
    args = parser.parse_args(["texts", "gazelle", "--styles"])
    assert args.command == "texts"
    assert args.styles is True
