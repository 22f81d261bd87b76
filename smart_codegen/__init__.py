"""smart-codegen -- template-driven code scaffolder.

Copies a template directory into a project, substituting module-name
placeholders and expanding nested body objects into form fields, type
declarations, default values and validation schemas.
"""

__version__ = "1.0.1"
