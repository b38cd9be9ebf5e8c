"""
# bprint: print binary records with printf.

A binary file is read as a flat sequence of fixed size records, each record
being a list of little endian integers described by a compact layout
specifier (the integer subset of the letters used by Ruby's Array#unpack)

    c: signed 8-bit integer
    s: signed 16-bit integer
    l: signed 32-bit integer
    q: signed 64-bit integer

upper case letters are the unsigned counterparts, a number following a
letter tells how many times that letter is repeated (C16 is sixteen
unsigned bytes).

Every record is then rendered with a printf-like template where

    %02x,4#

is a shorthand for four times the "%02x" directive separated by ",".

The work is split in three steps

 1. compile the layout specifier into a FieldLayout (layout.py)
 2. expand the template and check it has a directive for each field
    (template.py); both checks happen before any data is read
 3. loop over the stream decoding and printing records (core.py)

"""
__version__ = '0.1'
