"""Describes the bento planning domain. Centres around the `Session`.

Two pipelines feed one session:

- Generation. The free-text fields and the selected mode become a prompt,
  the model answers with JSON, and the JSON becomes a typed plan.
- Ingestion. A photo of a receipt or of some vegetables becomes a list of
  ingredient names, which is appended to one of the text fields.

Both pipelines talk to a generative backend through small protocols so the
backend can be faked.
"""
