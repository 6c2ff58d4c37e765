"""
Test Fixtures - Shared Test Data and Configurations.

    - documents.json: Document hub collection (14 records, including
      missing, null and numeric categories)
    - providers.yaml: Provider directory collection
    - not_a_list.json: Malformed collection (single object)
    - sample_config.yaml: Sample configuration for testing
"""
