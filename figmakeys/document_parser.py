"""
Document parser — run a node parser over the declared pages and variants.

For every page the tree reducer folds the page (or each of its variant
frames) through the node parser, the variant passes are merged into one map,
and duplicate keys are reported after each variant and each page.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from .duplicates import FigmaFile, create_warning, find_duplicate_warnings
from .filters import FilterPolicy
from .tree_reducer import find_nearest_linkable_parent, reduce_tree
from .variant_merger import merge_variant_pass, merge_variants


class PageNotFoundError(LookupError):
    """A declared page is missing from the document; the run cannot continue."""

    def __init__(self, page: str, project: str = ""):
        self.page = page
        self.project = project
        super().__init__(f"unable to find the '{page}' page in the downloaded figma file (in {project} project)")


@dataclass
class ParserContext:
    """Everything a node parser may need besides the node and the accumulator."""
    figma_file: FigmaFile
    page: Optional[str] = None
    variant: Optional[str] = None
    out_dir: Optional[str] = None
    policy: FilterPolicy = field(default_factory=FilterPolicy)
    parents: dict = field(default_factory=dict)
    context_data: dict = field(default_factory=dict)
    warnings: list = field(default_factory=list)

    def warn(self, node: dict, description: str) -> None:
        self.warnings.append(create_warning(node, self.figma_file, description=description, page=self.page))

    def linkable_parent(self, node: dict) -> Optional[dict]:
        return find_nearest_linkable_parent(node, self.parents)


@dataclass
class ParseResult:
    records: dict
    warnings: list


NodeParser = Callable[[dict, dict, ParserContext], dict]


def find_child(node: dict, name: str) -> Optional[dict]:
    for child in node.get("children") or []:
        if child.get("name") == name:
            return child
    return None


def parse_document(
    document: dict,
    figma_file: FigmaFile,
    node_parser: NodeParser,
    *,
    variants=(),
    policy: Optional[FilterPolicy] = None,
    project: str = "",
    variant_merger=merge_variants,
    out_dir: Optional[str] = None,
    context_data: Optional[dict] = None,
) -> ParseResult:
    """Parse every page of ``figma_file`` found in ``document``.

    Raises ``PageNotFoundError`` when a page is missing. Missing variants,
    key format mismatches and duplicate keys end up in ``ParseResult.warnings``.
    """
    policy = policy or FilterPolicy()
    context_data = context_data if context_data is not None else {}
    warnings: list = []
    records: dict = {}

    def traverse(root: dict, page: str, variant: Optional[str]) -> dict:
        context = ParserContext(
            figma_file=figma_file,
            page=page,
            variant=variant,
            out_dir=out_dir,
            policy=policy,
            parents={},
            context_data=context_data,
            warnings=warnings,
        )

        def include(node: dict) -> bool:
            decision = policy.check(node)
            if decision.description:
                context.warn(node, decision.description)
            return decision.include

        return reduce_tree(
            root,
            lambda acc, node: node_parser(node, acc, context),
            initial={},
            include=include,
            prune=policy.should_prune,
            parents=context.parents,
        )

    for page in figma_file.pages:
        page_root = find_child(document, page)
        if page_root is None:
            raise PageNotFoundError(page, project)

        if not variants:
            page_records = traverse(page_root, page, None)
        else:
            page_records = {}
            for variant in variants:
                variant_root = find_child(page_root, variant)
                if variant_root is None:
                    warnings.append(create_warning(
                        {"id": page_root.get("id"), "name": variant},
                        figma_file,
                        page=page,
                        description=f"unable to find variant '{variant}' in {page}",
                    ))
                    continue
                parsed = traverse(variant_root, page, variant)
                merged = merge_variant_pass(parsed, page_records, variant_merger)
                warnings.extend(find_duplicate_warnings(parsed, page_records, figma_file, page=page, variant=variant))
                page_records = merged

        warnings.extend(find_duplicate_warnings(page_records, records, figma_file, page=page))
        if variants:
            # A key may collect its variants from several pages
            records = merge_variant_pass(page_records, records, variant_merger)
        else:
            records = {**records, **page_records}

    return ParseResult(records=records, warnings=warnings)
