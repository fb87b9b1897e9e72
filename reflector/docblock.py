# -*- coding: utf-8 -*-
import re


def strip_tags(docblock):
    """Strip the comment markers and all the tags out of docblock, leaving the
    description prose

    Tags are removed a line at a time, so if a tag's content wraps onto the
    next line only the first line of the tag is removed and the rest is left
    in the description

    :Example:
        strip_tags("/**\n * Summary line.\n * @param string $x desc\n */")
        # "Summary line."

    :param docblock: str|None, the raw docblock
    :returns: str|None, None if docblock was None
    """
    if docblock is None:
        return None

    # /** and */ markers
    doc = re.sub(r"^\s*/\*\*|\*/\s*$", "", docblock)
    # leading alignment asterisks and # comment markers
    doc = re.sub(r"^[ \t]*\*[ \t]*", "", doc, flags=re.MULTILINE)
    doc = re.sub(r"^[ \t]*#+(?=[ \t]|$)", "", doc, flags=re.MULTILINE)
    # @tags (eg, @param string $foo description)
    doc = re.sub(r"@\w+\s+[^\n]+", "", doc)
    # ReST fields (eg, :param foo: description)
    doc = re.sub(
        r"^[ \t]*:\w[^:\n]*:(?=\s|$)[^\n]*",
        "",
        doc,
        flags=re.MULTILINE,
    )
    return re.sub(r"\s+", " ", doc).strip()


class ReflectDocblock(object):
    """Information about a method's docblock

    This understands two styles of parameter tags:

        * phpDoc/javadoc: `@param <TYPE> $<NAME> <DESCRIPTION>`
        * ReST: `:param <TYPE> <NAME>: <DESCRIPTION>`, the type is optional

    https://docs.phpdoc.org/guide/references/phpdoc/tags/param.html
    https://www.sphinx-doc.org/en/master/usage/domains/python.html#info-field-lists
    """
    at_param_regex = re.compile(
        r"@param[ \t]+(\S+)[ \t]+\$(\w+)[ \t]*([^\n]*)"
    )

    rest_param_regex = re.compile(
        r"^([ \t]*):param[ \t]+(?:([^\s:]+)[ \t]+)?(\w+)[ \t]*:[ \t]*([^\n]*)",
        flags=re.MULTILINE,
    )

    def __init__(self, target, **kwargs):
        """
        :param target: str, the raw docblock
        """
        self.target = target

    def get_docblock(self, strip_tags=False):
        """Get the docblock

        :param strip_tags: bool, True to remove comment markers and tags
        :returns: str, the verbatim docblock or the stripped description
        """
        if strip_tags:
            return self.get_description()

        return self.target

    def get_description(self):
        """Get the docblock description without any tags"""
        return strip_tags(self.target)

    def get_param_tags(self):
        """Get all the documented parameters

        If a parameter is documented more than once the last one wins

        :returns: dict[str, dict[str, str|None]], the key is the parameter
            name and the value has "type" and "description" keys, either of
            which can be None if the tag didn't have them
        """
        tags = {}
        for name, ptype, desc in self._get_at_params():
            tags[name] = {"type": ptype, "description": desc}

        for name, ptype, desc in self._get_rest_params():
            tags[name] = {"type": ptype, "description": desc}

        return tags

    def _get_at_params(self):
        """Internal method. Yields the `@param` tags, these are line oriented
        so the type, name, and description all have to be on one line

        :returns: generator[tuple[str, str, str|None]], name, type, desc
        """
        for m in self.at_param_regex.finditer(self.target):
            yield m.group(2), m.group(1), m.group(3).strip() or None

    def _get_rest_params(self):
        """Internal method. Yields the `:param:` fields, unlike `@param` tags
        indented lines after the field are part of its description

        :returns: generator[tuple[str, str|None, str|None]], name, type, desc
        """
        lines = self.target.splitlines()
        for m in self.rest_param_regex.finditer(self.target):
            indent = len(m.group(1).expandtabs())
            desc = [m.group(4).strip()]

            lineno = self.target.count("\n", 0, m.start())
            for line in lines[lineno + 1:]:
                if not line.strip():
                    break

                if len(line.expandtabs()) - len(line.lstrip().expandtabs()) <= indent:
                    break

                desc.append(line.strip())

            desc = " ".join(d for d in desc if d)
            yield m.group(3), m.group(2), desc or None

