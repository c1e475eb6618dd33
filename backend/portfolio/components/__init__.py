"""
Components layer shared by server and client.

- `entities.py`: create / update / public shapes of every entity
- `contracts.py`: the route table both sides validate against
- `icons.py`: static icon-name to glyph lookup
"""
