"""
mlconfig Package

Directory Structure:
├── documents/         # The two JSON documents and their helpers
│   ├── store.py       # Load / save / field-path edits
│   ├── project_metadata.py
│   ├── api_config.py  # Integration blocks, env credential resolution
│   └── templates/     # Example documents copied by init_configs.py
├── domain/            # Errors and document events
├── application/       # Event handlers and the metrics service
└── config.py          # Application configuration

Document Types:
1. **Project metadata** (project_metadata.json): descriptive, training and
   performance information about a trained model
2. **API configuration** (api_config.json): endpoints, credentials and
   toggles for external ML platforms

Both are plain JSON edited by hand or by the small scripts at the
repository root.
"""
