"""Pydantic models for MyVariant.info variant annotation responses.

Only the population frequency and predictor fields used for filtering are
modelled; everything else in a hit is ignored. Numeric fields may come back as
a single value or a list (one per transcript or allele), so they are typed
loosely and reduced by the client.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Numeric = float | list[float | None] | None


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GnomadAlleleFrequencies(_Lenient):
    """gnomad_exome.af / gnomad_genome.af; values are fractions."""

    af: Numeric = None
    af_afr: Numeric = None
    af_amr: Numeric = None
    af_asj: Numeric = None
    af_eas: Numeric = None
    af_fin: Numeric = None
    af_nfe: Numeric = None
    af_oth: Numeric = None
    af_sas: Numeric = None


class GnomadData(_Lenient):
    af: GnomadAlleleFrequencies | None = None


class ExacAlleleCounts(_Lenient):
    ac_afr: Numeric = None
    ac_amr: Numeric = None
    ac_eas: Numeric = None
    ac_fin: Numeric = None
    ac_nfe: Numeric = None
    ac_oth: Numeric = None
    ac_sas: Numeric = None


class ExacAlleleNumbers(_Lenient):
    an_afr: Numeric = None
    an_amr: Numeric = None
    an_eas: Numeric = None
    an_fin: Numeric = None
    an_nfe: Numeric = None
    an_oth: Numeric = None
    an_sas: Numeric = None


class ExacData(_Lenient):
    ac: ExacAlleleCounts | None = None
    an: ExacAlleleNumbers | None = None


class EvsMinorAlleleFrequency(_Lenient):
    """ESP minor allele frequencies; already percentages."""

    ea: Numeric = None
    aa: Numeric = None
    all: Numeric = None


class EvsData(_Lenient):
    maf: EvsMinorAlleleFrequency | None = None


class DbSnpData(_Lenient):
    rsid: str | None = None


class ScoreField(_Lenient):
    score: Numeric = None


class Polyphen2Data(_Lenient):
    hdiv: ScoreField | None = None


class CaddField(_Lenient):
    phred: Numeric = None


class ThousandGenomesData(_Lenient):
    af: Numeric = None


class DbNsfpData(_Lenient):
    polyphen2: Polyphen2Data | None = None
    sift: ScoreField | None = None
    mutationtaster: ScoreField | None = None
    revel: ScoreField | None = None
    cadd: CaddField | None = None
    thousand_genomes: ThousandGenomesData | None = Field(None, alias="1000gp3")


class MyVariantHit(_Lenient):
    """A single variant document from /v1/variant/{hgvs}."""

    id: str | None = Field(None, alias="_id")
    dbsnp: DbSnpData | None = None
    gnomad_exome: GnomadData | None = None
    gnomad_genome: GnomadData | None = None
    exac: ExacData | None = None
    evs: EvsData | None = None
    dbnsfp: DbNsfpData | None = None

    @classmethod
    def from_response(cls, data: Any) -> "MyVariantHit | None":
        """Parse a variant endpoint payload, which may be one hit or a list of hits."""
        if isinstance(data, list):
            data = data[0] if data else None
        if not data:
            return None
        return cls.model_validate(data)
