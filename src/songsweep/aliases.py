from songsweep.core.models import ArtistFallback, HashAlgorithmName

ARTIST_FALLBACK_ALIASES = {
    "none": ArtistFallback.NONE,
    "root": ArtistFallback.ROOT,
    "parent": ArtistFallback.PARENT,
}

ARTIST_FALLBACK_CHOICES = list(ARTIST_FALLBACK_ALIASES.keys())

ARTIST_FALLBACK_HELP_TEXT = (
    "Artist for files whose name does not carry one:\n"
    "  none    : Treat them as 'Unknown' (short titles are then never matched)\n"
    "  root    : Use the name of the scanned directory (one folder per artist)\n"
    "  parent  : Use the name of each file's own folder\n"
    "--artist NAME overrides this with an explicit name. Default: root\n"
)

HASH_ALIASES = {
    "xxhash": HashAlgorithmName.XXHASH,
    "md5": HashAlgorithmName.MD5,
}

HASH_CHOICES = list(HASH_ALIASES.keys())

HASH_HELP_TEXT = (
    "Content hash for exact duplicates:\n"
    "  xxhash  : xxHash64 (fast, default)\n"
    "  md5     : MD5\n"
)

SCRIPT_FORMAT_CHOICES = ["sh", "bat"]

EPILOG_TEXT = """
Examples:
  Report duplicates in one artist folder and write _cleanup_duplicates.sh
  %(prog)s dupes -i ~/Music/Beyond --artist-fallback root

  Same, but move the duplicates into _duplicates_temp right away
  %(prog)s dupes -i ~/Music/Beyond --artist-fallback root --apply

  Live recordings, backing tracks and intros
  %(prog)s special -i ~/Music/Beyond

  Lyric files without a song, folders without music
  %(prog)s orphans -i ~/Music
  %(prog)s empty-dirs -i ~/Music --apply

  Send a reviewed quarantine folder to the trash
  %(prog)s purge -i ~/Music/Beyond/_duplicates_temp

Nothing is ever deleted outright: files are moved into the quarantine folder,
and purge only sends that folder to the system trash.
"""
