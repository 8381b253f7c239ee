"""Tests for CSV ingestion and export."""

import io

import pandas as pd
import pytest

from lead_qualifier.models.schemas import Intent
from lead_qualifier.utils.csv_io import (
    parse_leads_csv,
    export_scored_leads_csv,
    LeadIngestionError,
)


class TestParse:
    def test_parses_rows_in_order(self, leads_csv):
        leads = parse_leads_csv(leads_csv)
        assert [lead.name for lead in leads] == ["Amy Chen", "Bob Stone", "Cara Diaz"]
        assert leads[1].role == ""
        assert leads[1].industry == ""

    def test_trims_values_and_headers(self):
        content = (
            " Name , ROLE,company,industry,location,linkedin_bio\n"
            "  Amy Chen  , VP of Sales ,Acme,B2B SaaS,NYC,Bio\n"
        ).encode("utf-8")
        lead = parse_leads_csv(content)[0]
        assert lead.name == "Amy Chen"
        assert lead.role == "VP of Sales"

    def test_drops_rows_without_name(self):
        content = (
            "name,role,company,industry,location,linkedin_bio\n"
            "   ,CEO,Acme,SaaS,NYC,Bio\n"
            "Real Person,CEO,Acme,SaaS,NYC,Bio\n"
        ).encode("utf-8")
        leads = parse_leads_csv(content)
        assert [lead.name for lead in leads] == ["Real Person"]

    @pytest.mark.filterwarnings("ignore::pandas.errors.ParserWarning")
    def test_unquoted_comma_in_bio_keeps_fields_in_place(self):
        content = (
            "name,role,company,industry,location,linkedin_bio\n"
            "Amy Chen,VP of Sales,Acme,B2B SaaS,NYC,Scaling outbound, with automation\n"
        ).encode("utf-8")
        lead = parse_leads_csv(content)[0]
        assert lead.name == "Amy Chen"
        assert lead.role == "VP of Sales"
        assert lead.company == "Acme"
        assert lead.industry == "B2B SaaS"
        assert lead.location == "NYC"
        assert lead.linkedin_bio.startswith("Scaling outbound")

    def test_short_rows_become_blank_fields(self):
        content = "name,role,company,industry,location,linkedin_bio\nSolo,CEO\n".encode("utf-8")
        lead = parse_leads_csv(content)[0]
        assert lead.role == "CEO"
        assert lead.linkedin_bio == ""

    def test_header_only_gives_no_leads(self):
        assert parse_leads_csv(b"name,role,company,industry,location,linkedin_bio\n") == []

    def test_missing_columns(self):
        with pytest.raises(LeadIngestionError) as exc:
            parse_leads_csv(b"name,role\nAmy,CEO\n")
        assert "company" in str(exc.value)
        assert "linkedin_bio" in str(exc.value)

    def test_empty_file(self):
        with pytest.raises(LeadIngestionError):
            parse_leads_csv(b"")


class TestExport:
    def test_columns_and_values(self, engine, amy, bare_lead, offer):
        results = engine.score_batch([bare_lead, amy], offer)
        content = export_scored_leads_csv(results)

        assert content.splitlines()[0] == (
            "Name,Role,Company,Industry,Location,LinkedIn Bio,"
            "Intent,Total Score,Rule Score,AI Score,AI Reasoning"
        )

        df = pd.read_csv(io.StringIO(content), keep_default_na=False)
        assert list(df["Name"]) == ["Amy Chen", "Bob Stone"]
        assert list(df["Intent"]) == [Intent.HIGH.value, Intent.LOW.value]
        assert list(df["Total Score"]) == [100, 10]
        assert df["AI Reasoning"][0] == "Based on profile analysis: VP of Sales in B2B SaaS industry."

    def test_empty_results(self):
        content = export_scored_leads_csv([])
        assert content.splitlines()[0].startswith("Name,Role,Company")
