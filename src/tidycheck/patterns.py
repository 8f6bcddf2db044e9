import re

# Perl modules, scripts, Makefile.PL-style templates and tests
DEFAULT_EXTENSIONS = ["pl", "pm", "PL", "t"]

PERL_FILE_PATTERN = re.compile(r"\.(?:%s)$" % "|".join(DEFAULT_EXTENSIONS))

# Staged copies under blib/ are build output, never tested
DEFAULT_EXCLUDES = (re.compile(r"^blib/"),)
