"""Gene models."""

import logging
from typing import Iterable

from pydantic import Field

from variantfilter.models.filterable import Filterable
from variantfilter.models.inheritance import ModeOfInheritance
from variantfilter.models.variant import VariantEvaluation

logger = logging.getLogger(__name__)


class Gene(Filterable):
    """A gene and the variant evaluations it owns.

    ``priority_score`` and ``compatible_inheritance_modes`` are computed
    upstream; filters only read them.
    """

    gene_symbol: str
    entrez_gene_id: int
    variant_evaluations: list[VariantEvaluation] = Field(default_factory=list)
    priority_score: float = 0.0
    compatible_inheritance_modes: set[ModeOfInheritance] = Field(default_factory=set)

    def model_post_init(self, __context) -> None:
        for variant_evaluation in self.variant_evaluations:
            self._claim(variant_evaluation)

    def _claim(self, variant_evaluation: VariantEvaluation) -> None:
        owner = variant_evaluation._gene
        if owner is not None and owner is not self:
            raise ValueError(
                f"{variant_evaluation.variant_key()} already belongs to gene {owner.gene_symbol}"
            )
        variant_evaluation._gene = self

    def add_variant_evaluation(self, variant_evaluation: VariantEvaluation) -> None:
        """Take ownership of a variant. A variant can belong to only one gene."""
        self._claim(variant_evaluation)
        self.variant_evaluations.append(variant_evaluation)

    def has_variants(self) -> bool:
        return len(self.variant_evaluations) > 0

    def passed_variant_evaluations(self) -> list[VariantEvaluation]:
        return [ve for ve in self.variant_evaluations if ve.passed_filters()]

    def is_compatible_with(self, mode: ModeOfInheritance) -> bool:
        return mode in self.compatible_inheritance_modes

    def __str__(self) -> str:
        return (
            f"Gene({self.gene_symbol} entrez={self.entrez_gene_id} "
            f"variants={len(self.variant_evaluations)} priority={self.priority_score})"
        )


def genes_from_variants(variant_evaluations: Iterable[VariantEvaluation]) -> list[Gene]:
    """Group variants into genes by Entrez gene id, in first-seen order.

    Variants with no Entrez gene id are not assigned to any gene. Any earlier
    grouping of the given variants is released, so regrouping the same
    variants builds fresh genes.

    A gene's priority score is the highest of its variants' scores and its
    compatible inheritance modes are the union of theirs.
    """
    genes: dict[int, Gene] = {}
    unassigned = 0
    for variant_evaluation in variant_evaluations:
        variant_evaluation._gene = None
        gene_id = variant_evaluation.entrez_gene_id
        if gene_id is None:
            unassigned += 1
            continue
        gene = genes.get(gene_id)
        if gene is None:
            gene = Gene(
                gene_symbol=variant_evaluation.gene_symbol or str(gene_id),
                entrez_gene_id=gene_id,
            )
            genes[gene_id] = gene
        gene.add_variant_evaluation(variant_evaluation)
        gene.priority_score = max(gene.priority_score, variant_evaluation.priority_score)
        gene.compatible_inheritance_modes |= variant_evaluation.compatible_inheritance_modes

    if unassigned:
        logger.debug(f"{unassigned} variants have no gene id and were not grouped")
    return list(genes.values())
