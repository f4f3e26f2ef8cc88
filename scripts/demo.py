#!/usr/bin/env python3
"""
Demo script for semantic query.

This script resolves and compiles the two canned intents (GitHub and
Countries) against the packaged ontologies, then runs a prompt through the
cache twice to show a miss followed by a hit. Requires a reachable cache
backend for the second part (see CACHE_BACKEND).
"""

import sys

from semantic_query import (
    GraphQLDispatcher,
    MappingStoreRegistry,
    OntologyResolver,
    QueryCompiler,
    QueryService,
    SemanticCache,
    StubIntentExtractor,
    VariantRegistry,
    parse_intent,
)
from semantic_query.api.dependencies import create_repository


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def demo_compile(resolver: OntologyResolver, compiler: QueryCompiler) -> None:
    """Compile the canned intents without touching the cache."""
    extractor = StubIntentExtractor()

    for api in ("github", "countries"):
        print_section(f"Compiling the {api} intent")
        intent = parse_intent(extractor.extract("", api))
        target = resolver.resolve_target(intent.target, intent.api)
        sub_entity = resolver.resolve_sub_entity(intent.sub_entity, intent.constraint, intent.api)

        print(f"  target:     {target}")
        print(f"  sub-entity: {sub_entity}")
        print()
        print(compiler.compile(intent, target, sub_entity))


def demo_cache(service: QueryService) -> None:
    """Compile the same prompt twice: a miss, then a hit."""
    print_section("Prompt cache")
    prompt = "Which continent is Brazil in?"
    service.invalidate(prompt)

    for attempt in (1, 2):
        outcome = service.compile_only(prompt, "countries")
        print(f"  attempt {attempt}: cache_hit={outcome.cache_hit}")

    service.invalidate(prompt)


def main() -> int:
    variants = VariantRegistry.create()
    resolver = OntologyResolver(MappingStoreRegistry.create(variants))
    compiler = QueryCompiler(variants)

    demo_compile(resolver, compiler)

    repository = create_repository()
    if not repository.health_check():
        print("\nCache backend not reachable, skipping the cache demo.")
        return 0

    service = QueryService(
        extractor=StubIntentExtractor(),
        cache=SemanticCache.create(repository=repository),
        resolver=resolver,
        compiler=compiler,
        dispatcher=GraphQLDispatcher.create(variants),
    )
    demo_cache(service)
    return 0


if __name__ == "__main__":
    sys.exit(main())
