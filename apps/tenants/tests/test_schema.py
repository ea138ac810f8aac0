"""
Tests for the versioned JSON blobs
"""

from django.test import SimpleTestCase

from apps.tenants.schema import (
    CURRENT_SCHEMA_VERSION,
    BrandingSettings,
    PartnerProfile,
    SchemaVersionError,
    migrate_blob,
)


class MigrateBlobTest(SimpleTestCase):

    def test_empty_blob(self):
        self.assertEqual(migrate_blob(None), {'schema_version': CURRENT_SCHEMA_VERSION})
        self.assertEqual(migrate_blob('not a dict'), {'schema_version': CURRENT_SCHEMA_VERSION})

    def test_unversioned_branding_is_upgraded(self):
        data = migrate_blob({'color': '#FF0000', 'logo': 'https://example.com/logo.png'})
        self.assertEqual(data, {
            'primary_color': '#FF0000',
            'logo_url': 'https://example.com/logo.png',
            'schema_version': CURRENT_SCHEMA_VERSION,
        })

    def test_input_not_modified(self):
        blob = {'color': '#ff0000'}
        migrate_blob(blob)
        self.assertEqual(blob, {'color': '#ff0000'})

    def test_newer_version_refused(self):
        with self.assertRaises(SchemaVersionError):
            migrate_blob({'schema_version': CURRENT_SCHEMA_VERSION + 1})

    def test_unreadable_versions_refused(self):
        for version in ('1', True, -1, 1.0):
            with self.assertRaises(SchemaVersionError):
                migrate_blob({'schema_version': version})


class BrandingSettingsTest(SimpleTestCase):

    def test_defaults(self):
        self.assertEqual(BrandingSettings.from_blob(None), BrandingSettings())

    def test_invalid_colour_keeps_default(self):
        self.assertEqual(BrandingSettings.from_blob({'primary_color': 'red'}).primary_color, '#2563eb')

    def test_round_trip_from_legacy_blob(self):
        branding = BrandingSettings.from_blob({'color': '#ABCDEF', 'display_name': ' Acme '})
        self.assertEqual(branding.primary_color, '#abcdef')
        self.assertEqual(branding.display_name, 'Acme')
        self.assertEqual(branding.to_blob()['schema_version'], CURRENT_SCHEMA_VERSION)


class PartnerProfileTest(SimpleTestCase):

    def test_tier_defaults_to_prospect(self):
        profile = PartnerProfile.from_blob({'partner_type': 'realtor'})
        self.assertEqual(profile.partner_tier, 'prospect')
        self.assertEqual(profile.partner_type, 'realtor')

    def test_to_blob(self):
        blob = PartnerProfile('realtor', 'top50', 'Keller').to_blob()
        self.assertEqual(blob, {
            'schema_version': CURRENT_SCHEMA_VERSION,
            'partner_type': 'realtor',
            'partner_tier': 'top50',
            'company': 'Keller',
        })
