"""Starter content for a new site."""

DEFAULT_MARKUP = """\
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Preview</title>
  </head>
  <body>
    <div id="app">Hello from Voice Builder</div>
  </body>
</html>"""

DEFAULT_STYLE = """\
body { font-family: Arial, sans-serif; padding: 40px; background: #f7f7f7; }
#app { max-width: 900px; margin: 0 auto; }
"""

DEFAULT_SCRIPT = "// You can add JS here\nconsole.log('Preview running')"
