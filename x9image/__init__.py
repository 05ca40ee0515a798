"""
# x9image: image extraction from cash letter files.

A cash letter is the batch file exchanged between banks with the detail of
the checks and their scanned images, a sequence of fixed width ASCII records
each one preceded by a 4 bytes tag.

The records are described declaratively (see x9image.cashletter) as chunks
made of fields, and the stream is read exactly once, forward only:

 1. Stream: reads or discards exactly n bytes, complaining loudly if they
    are not there.
 2. Chunk/Field: a record and its fields, unpacked in declaration order;
    the lengths can depend on other fields or on the layout mode.
 3. Dispatcher: reads the tags and routes to the right record, keeping the
    running context (layout mode, check number, image type).
 4. WriteOffQueue/Writer: the images go to writer threads through a bounded
    queue so that the decoding never waits for the disk more than needed.

The layout mode (fixed or variable) is decided by the file header and
changes the length of the filler of every following record.
"""
