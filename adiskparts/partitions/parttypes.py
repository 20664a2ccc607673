import uuid
import types
from collections import namedtuple

from adiskparts.exceptions import GUIDParseError
from adiskparts.partitions.guid import guid_from_string, guid_to_string

PartitionTypeInfo = namedtuple('PartitionTypeInfo', ['os', 'description'])

UNKNOWN = PartitionTypeInfo('Unknown', 'Unknown')

# https://en.wikipedia.org/wiki/GUID_Partition_Table#Partition_type_GUIDs
_GPT_TYPES = {
    '00000000-0000-0000-0000-000000000000' : ('None', 'Unused entry'),
    '024DEE41-33E7-11D3-9D69-0008C781F39F' : ('None', 'MBR partition scheme'),
    'C12A7328-F81F-11D2-BA4B-00A0C93EC93B' : ('None', 'EFI System Partition'),
    '21686148-6449-6E6F-744E-656564454649' : ('None', 'BIOS boot partition'),
    'D3BFE2DE-3DAF-11DF-BA40-E3A556D89593' : ('None', 'Intel Fast Flash (iFFS) partition'),
    'F4019732-066E-4E12-8273-346C5641494F' : ('None', 'Sony boot partition'),
    'BFBFAFE7-A34F-448A-9A5B-6213EB736C22' : ('None', 'Lenovo boot partition'),

    'E3C9E316-0B5C-4DB8-817D-F92DF00215AE' : ('Windows', 'Microsoft Reserved Partition (MSR)'),
    'EBD0A0A2-B9E5-4433-87C0-68B6B72699C7' : ('Windows', 'Basic data partition'),
    '5808C8AA-7E8F-42E0-85D2-E1E90434CFB3' : ('Windows', 'Logical Disk Manager (LDM) metadata partition'),
    'AF9B60A0-1431-4F62-BC68-3311714A69AD' : ('Windows', 'Logical Disk Manager data partition'),
    'DE94BBA4-06D1-4D40-A16A-BFD50179D6AC' : ('Windows', 'Windows Recovery Environment'),
    '37AFFC90-EF7D-4E96-91C3-2D7AE055B174' : ('Windows', 'IBM General Parallel File System (GPFS) partition'),
    'E75CAF8F-F680-4CEE-AFA3-B001E56EFC2D' : ('Windows', 'Storage Spaces partition'),
    '558D43C5-A1AC-43C0-AAC8-D1472B2923D1' : ('Windows', 'Storage Replica partition'),

    '75894C1E-3AEB-11D3-B7C1-7B03A0000000' : ('HP-UX', 'Data partition'),
    'E2A1E728-32E3-11D6-A682-7B03A0000000' : ('HP-UX', 'Service partition'),

    '0FC63DAF-8483-4772-8E79-3D69D8477DE4' : ('Linux', 'Linux filesystem data'),
    'A19D880F-05FC-4D3B-A006-743F0F84911E' : ('Linux', 'RAID partition'),
    '44479540-F297-41B2-9AF7-D131D5F0458A' : ('Linux', 'Root partition (x86)'),
    '4F68BCE3-E8CD-4DB1-96E7-FBCAF984B709' : ('Linux', 'Root partition (x86-64)'),
    '69DAD710-2CE4-4E3C-B16C-21A1D49ABED3' : ('Linux', 'Root partition (ARM 32-bit)'),
    'B921B045-1DF0-41C3-AF44-4C6F280D3FAE' : ('Linux', 'Root partition (AArch64)'),
    '993D8D3D-F80E-4225-855A-9DAF8ED7EA97' : ('Linux', 'Root partition (IA-64)'),
    '60D5A7FE-8E7D-435C-B714-3DD8162144E1' : ('Linux', 'Root partition (RISC-V 32-bit)'),
    '72EC70A6-CF74-40E6-BD49-4BDA08E8F224' : ('Linux', 'Root partition (RISC-V 64-bit)'),
    '75250D76-8CC6-458E-BD66-BD47CC81A812' : ('Linux', '/usr partition (x86)'),
    '8484680C-9521-48C6-9C11-B0720656F69E' : ('Linux', '/usr partition (x86-64)'),
    '7D0359A3-02B3-4F0A-865C-654403E70625' : ('Linux', '/usr partition (ARM 32-bit)'),
    'B0E01050-EE5F-4390-949A-9101B17104E9' : ('Linux', '/usr partition (AArch64)'),
    'D13C5D3B-B5D1-422A-B29F-9454FDC89D76' : ('Linux', 'Root verity partition for dm-verity (x86)'),
    '2C7357ED-EBD2-46D9-AEC1-23D437EC2BF5' : ('Linux', 'Root verity partition for dm-verity (x86-64)'),
    'DF3300CE-D69F-4C92-978C-9BFB0F38D820' : ('Linux', 'Root verity partition for dm-verity (AArch64)'),
    'BC13C2FF-59E6-4262-A352-B275FD6F7172' : ('Linux', '/boot, as an Extended Boot Loader (XBOOTLDR) partition'),
    '0657FD6D-A4AB-43C4-84E5-0933C84B4F4F' : ('Linux', 'Swap partition'),
    'E6D6D379-F507-44C2-A23C-238F2A3DF928' : ('Linux', 'Logical Volume Manager (LVM) partition'),
    '933AC7E1-2EB4-4F13-B844-0E14E2AEF915' : ('Linux', '/home partition'),
    '3B8F8425-20E0-4F3B-907F-1A25A76F98E8' : ('Linux', '/srv (server data) partition'),
    '773F91EF-66D4-49B5-BD83-D683BF40AD16' : ('Linux', 'Per-user home partition'),
    '7FFEC5C9-2D00-49B7-8941-3EA10A5586B7' : ('Linux', 'Plain dm-crypt partition'),
    'CA7D7CCB-63ED-4C53-861C-1742536059CC' : ('Linux', 'LUKS partition'),
    '8DA63339-0007-60C0-C436-083AC8230908' : ('Linux', 'Reserved'),

    '83BD6B9D-7F41-11DC-BE0B-001560B84F0F' : ('FreeBSD', 'Boot partition'),
    '516E7CB4-6ECF-11D6-8FF8-00022D09712B' : ('FreeBSD', 'BSD disklabel partition'),
    '516E7CB5-6ECF-11D6-8FF8-00022D09712B' : ('FreeBSD', 'Swap partition'),
    '516E7CB6-6ECF-11D6-8FF8-00022D09712B' : ('FreeBSD', 'Unix File System (UFS) partition'),
    '516E7CB8-6ECF-11D6-8FF8-00022D09712B' : ('FreeBSD', 'Vinum volume manager partition'),
    '516E7CBA-6ECF-11D6-8FF8-00022D09712B' : ('FreeBSD', 'ZFS partition'),
    '74BA7DD9-A689-11E1-BD04-00E081286ACF' : ('FreeBSD', 'nandfs partition'),

    '48465300-0000-11AA-AA11-00306543ECAC' : ('macOS', 'Hierarchical File System Plus (HFS+) partition'),
    '7C3457EF-0000-11AA-AA11-00306543ECAC' : ('macOS', 'Apple APFS container'),
    '55465300-0000-11AA-AA11-00306543ECAC' : ('macOS', 'Apple UFS container'),
    '6A898CC3-1DD2-11B2-99A6-080020736631' : ('macOS', 'ZFS'),
    '52414944-0000-11AA-AA11-00306543ECAC' : ('macOS', 'Apple RAID partition'),
    '52414944-5F4F-11AA-AA11-00306543ECAC' : ('macOS', 'Apple RAID partition, offline'),
    '426F6F74-0000-11AA-AA11-00306543ECAC' : ('macOS', 'Apple Boot partition (Recovery HD)'),
    '4C616265-6C00-11AA-AA11-00306543ECAC' : ('macOS', 'Apple Label'),
    '5265636F-7665-11AA-AA11-00306543ECAC' : ('macOS', 'Apple TV Recovery partition'),
    '53746F72-6167-11AA-AA11-00306543ECAC' : ('macOS', 'Apple Core Storage Container'),
    '69646961-6700-11AA-AA11-00306543ECAC' : ('macOS', 'Apple APFS Preboot partition'),
    '52637672-7900-11AA-AA11-00306543ECAC' : ('macOS', 'Apple APFS Recovery partition'),

    '6A82CB45-1DD2-11B2-99A6-080020736631' : ('Solaris', 'Boot partition'),
    '6A85CF4D-1DD2-11B2-99A6-080020736631' : ('Solaris', 'Root partition'),
    '6A87C46F-1DD2-11B2-99A6-080020736631' : ('Solaris', 'Swap partition'),
    '6A8B642B-1DD2-11B2-99A6-080020736631' : ('Solaris', 'Backup partition'),
    '6A8EF2E9-1DD2-11B2-99A6-080020736631' : ('Solaris', '/var partition'),
    '6A90BA39-1DD2-11B2-99A6-080020736631' : ('Solaris', '/home partition'),
    '6A9283A5-1DD2-11B2-99A6-080020736631' : ('Solaris', 'Alternate sector'),
    '6A945A3B-1DD2-11B2-99A6-080020736631' : ('Solaris', 'Reserved partition'),

    '49F48D32-B10E-11DC-B99B-0019D1879648' : ('NetBSD', 'Swap partition'),
    '49F48D5A-B10E-11DC-B99B-0019D1879648' : ('NetBSD', 'FFS partition'),
    '49F48D82-B10E-11DC-B99B-0019D1879648' : ('NetBSD', 'LFS partition'),
    '49F48DAA-B10E-11DC-B99B-0019D1879648' : ('NetBSD', 'RAID partition'),
    '2DB519C4-B10F-11DC-B99B-0019D1879648' : ('NetBSD', 'Concatenated partition'),
    '2DB519EC-B10F-11DC-B99B-0019D1879648' : ('NetBSD', 'Encrypted partition'),

    'FE3A2A5D-4F32-41A7-B725-ACCC3285A309' : ('ChromeOS', 'ChromeOS kernel'),
    '3CB8E202-3B7E-47DD-8A3C-7FF2A13CFCEC' : ('ChromeOS', 'ChromeOS rootfs'),
    'CAB6E88E-ABF3-4102-A07A-D4BB9BE3C1D3' : ('ChromeOS', 'ChromeOS firmware'),
    '2E0A753D-9E48-43B0-8337-B15192CB1B5E' : ('ChromeOS', 'ChromeOS future use'),
    '09845860-705F-4BB5-B16C-8A8A099CAF52' : ('ChromeOS', 'ChromeOS miniOS'),
    '3F0F8318-F146-4E6B-8222-C28C8F02E0D5' : ('ChromeOS', 'ChromeOS hibernate'),

    '5DFBF5F4-2848-4BAC-AA5E-0D9A20B745A6' : ('Container Linux', '/usr partition (coreos-usr)'),
    '3884DD41-8582-4404-B9A8-E9B84F2DF50E' : ('Container Linux', 'Resizable rootfs (coreos-resize)'),
    'C95DC21A-DF0E-4340-8D7B-26CBFA9A03E0' : ('Container Linux', 'OEM customizations (coreos-reserved)'),
    'BE9067B9-EA49-4F15-B4F6-F36F8C9E1818' : ('Container Linux', 'Root filesystem on RAID (coreos-root-raid)'),

    '42465331-3BA3-10F1-802A-4861696B7521' : ('Haiku', 'Haiku BFS'),

    '85D5E45E-237C-11E1-B4B3-E89A8F7FC3A7' : ('MidnightBSD', 'Boot partition'),
    '85D5E45A-237C-11E1-B4B3-E89A8F7FC3A7' : ('MidnightBSD', 'Data partition'),
    '85D5E45B-237C-11E1-B4B3-E89A8F7FC3A7' : ('MidnightBSD', 'Swap partition'),
    '0394EF8B-237E-11E1-B4B3-E89A8F7FC3A7' : ('MidnightBSD', 'Unix File System (UFS) partition'),
    '85D5E45C-237C-11E1-B4B3-E89A8F7FC3A7' : ('MidnightBSD', 'Vinum volume manager partition'),
    '85D5E45D-237C-11E1-B4B3-E89A8F7FC3A7' : ('MidnightBSD', 'ZFS partition'),

    '45B0969E-9B03-4F30-B4C6-B4B80CEFF106' : ('Ceph', 'Journal'),
    '45B0969E-9B03-4F30-B4C6-5EC00CEFF106' : ('Ceph', 'dm-crypt journal'),
    '4FBD7E29-9D25-41B8-AFD0-062C0CEFF05D' : ('Ceph', 'OSD'),
    '4FBD7E29-9D25-41B8-AFD0-5EC00CEFF05D' : ('Ceph', 'dm-crypt OSD'),
    '89C57F98-2FE5-4DC0-89C1-F3AD0CEFF2BE' : ('Ceph', 'Disk in creation'),
    'CAFECAFE-9B03-4F30-B4C6-B4B80CEFF106' : ('Ceph', 'Block'),
    '30CD0809-C2B2-499C-8879-2D6B78529876' : ('Ceph', 'Block DB'),
    '5CE17FCE-4087-4169-B7FF-056CC58473F9' : ('Ceph', 'Block write-ahead log'),

    '824CC7A0-36A8-11E3-890A-952519AD3F61' : ('OpenBSD', 'Data partition'),
    'CEF5A9AD-73BC-4601-89F3-CDEEEEE321A1' : ('QNX', 'Power-safe (QNX6) file system'),
    'C91818F9-8025-47AF-89D2-F030D7000C2C' : ('Plan 9', 'Plan 9 partition'),

    '9D275380-40AD-11DB-BF97-000C2911D1B8' : ('VMware ESX', 'vmkcore (coredump partition)'),
    'AA31E02A-400F-11DB-9590-000C2911D1B8' : ('VMware ESX', 'VMFS filesystem partition'),
    '9198EFFC-31C0-11DB-8F78-000C2911D1B8' : ('VMware ESX', 'VMware Reserved'),

    '2568845D-2332-4675-BC39-8FA5A4748D15' : ('Android-IA', 'Bootloader'),
    '114EAFFE-1552-4022-B26E-9B053604CF84' : ('Android-IA', 'Bootloader2'),
    '49A4D17F-93A3-45C1-A0DE-F50B2EBE2599' : ('Android-IA', 'Boot'),
    '4177C722-9E92-4AAB-8644-43502BFD5506' : ('Android-IA', 'Recovery'),
    'EF32A33B-A409-486C-9141-9FFB711F6266' : ('Android-IA', 'Misc'),
    '20AC26BE-20B7-11E3-84C5-6CFDB94711E9' : ('Android-IA', 'Metadata'),
    '38F428E6-D326-425D-9140-6E0EA133647C' : ('Android-IA', 'System'),
    'A893EF21-E428-470A-9E55-0668FD91A2D9' : ('Android-IA', 'Cache'),
    'DC76DDA9-5AC1-491C-AF42-A82591580C0D' : ('Android-IA', 'Data'),
    'EBC597D0-2053-4B15-8B64-E0AAC75F4DB1' : ('Android-IA', 'Persistent'),
    'C5A0AEEC-13EA-11E5-A1B1-001E67CA0C3C' : ('Android-IA', 'Vendor'),
    'BD59408B-4514-490D-BF12-9878D963F378' : ('Android-IA', 'Config'),
    '8F68CC74-C5E5-48DA-BE91-A0C8C15E9C80' : ('Android-IA', 'Factory'),
    '767941D0-2085-11E3-AD3B-6CFDB94711E9' : ('Android-IA', 'Fastboot / Tertiary'),
    'AC6D7924-EB71-4DF8-B48D-E267B27148FF' : ('Android-IA', 'OEM'),
    '19A710A2-B3CA-11E4-B026-10604B889DCF' : ('Android 6.0+ ARM', 'Android Meta'),
    '193D1EA4-B3CA-11E4-B075-10604B889DCF' : ('Android 6.0+ ARM', 'Android EXT'),

    '7412F7D5-A156-4B13-81DC-867174929325' : ('ONIE', 'Boot'),
    'D4E6E2CD-4469-46F3-B5CB-1BFF57AFC149' : ('ONIE', 'Config'),
    '9E1A2D38-C612-4316-AA26-8B49521E5A8B' : ('PowerPC', 'PReP boot'),
    '734E5AFE-F61A-11E6-BC64-92361F002671' : ('Atari TOS', 'Basic data partition (GEM, BGM, F32)'),
    '8C8F8EFF-AC95-4770-814A-21994F2DBC8F' : ('VeraCrypt', 'Encrypted data partition'),
    '90B6FF38-B98F-4358-A21F-48F35B4A8AD3' : ('OS/2', 'ArcaOS Type 1'),
    '7C5222BD-8F5D-4087-9C00-BF9843C7B58C' : ('SPDK', 'SPDK block device'),
    '4778ED65-BF42-45FA-9C5B-287A1DC4AAB1' : ('barebox', 'barebox-state'),
    '3DE21764-95BD-54BD-A5C3-4ABE786F38A8' : ('U-Boot', 'U-Boot environment'),
    'B6FA30DA-92D2-4A9A-96F1-871EC6486200' : ('SoftRAID', 'SoftRAID_Status'),
    '2E313465-19B9-463F-8126-8A7993773801' : ('SoftRAID', 'SoftRAID_Scratch'),
    'FA709C7E-65B1-4593-BFD5-E71D61DE9B02' : ('SoftRAID', 'SoftRAID_Volume'),
    'BBBA6DF5-F46F-4A89-8F59-8765B2727503' : ('SoftRAID', 'SoftRAID_Cache'),

    'FE8A2634-5E2E-46BA-99E3-3A192091A350' : ('Fuchsia', 'Bootloader (slot A/B/R)'),
    'D9FD4535-106C-4CEC-8D37-DFC020CA87CB' : ('Fuchsia', 'Durable mutable encrypted system data'),
    'A409E16B-78AA-4ACC-995C-302352621A41' : ('Fuchsia', 'Durable mutable bootloader data'),
    'F95D940E-CABA-4578-9B93-BB6C90F29D3E' : ('Fuchsia', 'Factory-provisioned read-only system data'),
    '10B8DBAA-D2BF-42A9-98C6-A7C5DB3701E7' : ('Fuchsia', 'Factory-provisioned read-only bootloader data'),
    '49FD7CB8-DF15-4E73-B9D9-992070127F0F' : ('Fuchsia', 'Fuchsia Volume Manager'),
    '421A8BFC-85D9-4D85-ACDA-B64EEC0133E9' : ('Fuchsia', 'Verified boot metadata (slot A/B/R)'),
    '9B37FFF6-2E58-466A-983A-F7926D0B04E0' : ('Fuchsia', 'Zircon boot image (slot A/B/R)'),
}

# https://en.wikipedia.org/wiki/Partition_type#List_of_partition_IDs
_MBR_TYPES = {
    0x00 : ('None', 'Empty'),
    0x01 : ('DOS', 'FAT12'),
    0x04 : ('DOS', 'FAT16 (< 32 MiB)'),
    0x05 : ('DOS', 'Extended partition (CHS)'),
    0x06 : ('DOS', 'FAT16B'),
    0x07 : ('Windows', 'NTFS / exFAT / HPFS'),
    0x0B : ('Windows', 'FAT32 (CHS)'),
    0x0C : ('Windows', 'FAT32 (LBA)'),
    0x0E : ('Windows', 'FAT16B (LBA)'),
    0x0F : ('Windows', 'Extended partition (LBA)'),
    0x11 : ('Windows', 'Hidden FAT12'),
    0x12 : ('None', 'Service / recovery partition'),
    0x14 : ('Windows', 'Hidden FAT16'),
    0x16 : ('Windows', 'Hidden FAT16B'),
    0x17 : ('Windows', 'Hidden NTFS / exFAT / HPFS'),
    0x1B : ('Windows', 'Hidden FAT32 (CHS)'),
    0x1C : ('Windows', 'Hidden FAT32 (LBA)'),
    0x1E : ('Windows', 'Hidden FAT16B (LBA)'),
    0x27 : ('Windows', 'Windows Recovery Environment'),
    0x39 : ('Plan 9', 'Plan 9 partition'),
    0x3C : ('None', 'PartitionMagic recovery partition'),
    0x42 : ('Windows', 'Dynamic extended partition (LDM)'),
    0x4D : ('QNX', 'QNX4.x primary partition'),
    0x63 : ('Unix', 'Unix System V / GNU Hurd'),
    0x78 : ('None', 'XOSL bootloader filesystem'),
    0x80 : ('Minix', 'Minix 1.1-1.4a'),
    0x81 : ('Minix', 'Minix 1.4b+'),
    0x82 : ('Linux', 'Linux swap / Solaris'),
    0x83 : ('Linux', 'Linux'),
    0x85 : ('Linux', 'Linux extended'),
    0x86 : ('Windows', 'NTFS volume set (FAT16)'),
    0x87 : ('Windows', 'NTFS volume set'),
    0x88 : ('Linux', 'Linux plaintext partition table'),
    0x8E : ('Linux', 'Linux LVM'),
    0x93 : ('Amoeba', 'Amoeba'),
    0x9F : ('BSD/OS', 'BSD/OS'),
    0xA0 : ('None', 'Hibernation partition'),
    0xA5 : ('FreeBSD', 'FreeBSD'),
    0xA6 : ('OpenBSD', 'OpenBSD'),
    0xA8 : ('macOS', 'Apple UFS'),
    0xA9 : ('NetBSD', 'NetBSD'),
    0xAB : ('macOS', 'Apple boot'),
    0xAF : ('macOS', 'Apple HFS / HFS+'),
    0xBE : ('Solaris', 'Solaris boot'),
    0xBF : ('Solaris', 'Solaris'),
    0xDA : ('None', 'Non-filesystem data'),
    0xDE : ('None', 'Dell diagnostics partition'),
    0xEB : ('BeOS', 'BFS'),
    0xEE : ('None', 'GPT protective MBR'),
    0xEF : ('None', 'EFI system partition'),
    0xFB : ('VMware ESX', 'VMware VMFS'),
    0xFC : ('VMware ESX', 'VMware VMKCORE'),
    0xFD : ('Linux', 'Linux RAID superblock with auto-detect'),
}

GPT_PARTITION_TYPES = types.MappingProxyType(
    {guid: PartitionTypeInfo(*info) for guid, info in _GPT_TYPES.items()}
)
MBR_PARTITION_TYPES = types.MappingProxyType(
    {code: PartitionTypeInfo(*info) for code, info in _MBR_TYPES.items()}
)

def lookup(key):
    """
    Resolves an MBR type byte (int), a GPT type GUID (uuid.UUID) or a
    GUID string (any case) to a PartitionTypeInfo.
    Unknown keys give the UNKNOWN sentinel.
    """
    if isinstance(key, bool):
        return UNKNOWN
    if isinstance(key, int):
        return MBR_PARTITION_TYPES.get(key, UNKNOWN)
    if isinstance(key, uuid.UUID):
        return GPT_PARTITION_TYPES.get(guid_to_string(key), UNKNOWN)
    if isinstance(key, str):
        try:
            guid = guid_from_string(key)
        except GUIDParseError:
            return UNKNOWN
        return GPT_PARTITION_TYPES.get(guid_to_string(guid), UNKNOWN)
    return UNKNOWN
